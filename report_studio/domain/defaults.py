"""
Default document template

A new editing session starts from ``default_document()``: a fully populated
sample report for a small managed-security client (file server, hardened
phones, a static web site) plus its monthly invoice.
"""

from .document import (
    Asset,
    AssetStatus,
    BankInfo,
    ChangeLogEntry,
    Currency,
    Document,
    EvidenceCategory,
    EvidenceItem,
    HealthScore,
    Invoice,
    LineItem,
    Meta,
    NewsItem,
    Party,
    Performance,
    ResourceStat,
    ResourceStats,
    Roadmap,
    SecurityAnalysis,
    Summary,
    ThreatStat,
)

MONTH_LABELS = ("1月", "2月", "3月", "4月", "5月")


def _series(values: tuple[int, ...]) -> tuple[ResourceStat, ...]:
    return tuple(ResourceStat(month=month, value=value) for month, value in zip(MONTH_LABELS, values))


def default_document() -> Document:
    """
    Build the sample document used at session start.

    Returns:
        A new Document; calling twice yields equal but independent snapshots
    """
    return Document(
        meta=Meta(
            year="2025",
            month="05",
            client_name="株式会社サンプル・プロジェクト",
            issue_date="2025年06月01日",
            author="山田 太郎 (Senior Security Consultant)",
            company_name="KAKEHASHI ASIA inc.",
        ),
        summary=Summary(
            score=HealthScore.S,
            uptime="100%",
            threats_blocked="14,280",
            backup_status="全日成功",
            comment=(
                "当月において、貴社の事業運営に影響を与えるシステム停止、"
                "およびセキュリティインシデントは皆無でした。\n\n"
                "Re:NAS（ファイルサーバー）の定期セキュリティアップデートにおきましても、"
                "冗長構成を活かした無停止メンテナンスに成功しており、データ保全性は極めて高い状態です。\n\n"
                "また、Re:Veil（スマートフォン）全台のOSバージョン整合性も確認済みであり、"
                "紛失・盗難などのインシデント報告もありません。"
            ),
        ),
        threat_stats=(
            ThreatStat(name="Port Scan", count=8500, color="#64748b"),
            ThreatStat(name="SQL Injection", count=1200, color="#ef4444"),
            ThreatStat(name="XSS Attempt", count=800, color="#f59e0b"),
            ThreatStat(name="Malware Download", count=150, color="#8b5cf6"),
            ThreatStat(name="Brute Force", count=3630, color="#3b82f6"),
        ),
        security_analysis=SecurityAnalysis(
            global_ip_title="Global IP Filtering",
            global_ip_comment=(
                "海外からの不正アクセス試行が全体の92%を占めています。"
                "Geo-IPフィルタリングにより、業務に関係のない国からのアクセスをネットワーク境界でドロップしています。"
            ),
            bot_defense_title="Automated Bot Defense",
            bot_defense_comment=(
                "既知のBotネットからのスキャン行為（Port 22, 443等）を検知。"
                "IPレピュテーションベースのブラックリストにより、偵察行為を無効化しました。"
            ),
        ),
        resource_stats=ResourceStats(
            storage=_series((42, 44, 45, 48, 50)),
            cpu=_series((30, 28, 35, 65, 40)),
        ),
        assets=(
            Asset(
                id="NAS-01",
                host_name="Re:NAS-Main",
                role="セキュアNAS",
                os="Debian 12 (Hardened)",
                status=AssetStatus.HEALTHY,
                detail="ZFS Pool Status: ONLINE (No Errors), Scrub完了: 2025/05/28",
            ),
            Asset(
                id="WEB-01",
                host_name="Corp-HP",
                role="簡易HP (Web)",
                os="Debian / Nginx",
                status=AssetStatus.HEALTHY,
                detail="WAF有効, SSL証明書有効期限: 残り320日",
            ),
            Asset(
                id="MOB-001",
                host_name="Re:Veil-User01",
                role="セキュアスマホ",
                os="GrapheneOS",
                status=AssetStatus.HEALTHY,
                detail="Auditor App: Verified, 最終同期: 2時間前",
            ),
            Asset(
                id="MOB-002",
                host_name="Re:Veil-User02",
                role="セキュアスマホ",
                os="GrapheneOS",
                status=AssetStatus.HEALTHY,
                detail="Auditor App: Verified, 最終同期: 5時間前",
            ),
        ),
        performance=Performance(
            storage_analysis=(
                "Re:NAS (ZFSプール) の使用率は50%に達しました。月間約2%の増加傾向にあり、"
                "今後18ヶ月間はディスク増設なしで運用可能です。"
            ),
            device_analysis="Re:Veil全端末において、GrapheneOSの最新パッチが適用されていることを確認しました。",
            web_analysis="外部公開Webサーバーへのアクセス数は安定しており、DDoS等の攻撃予兆は見られません。",
        ),
        evidence=(
            EvidenceItem(
                id="ev1",
                title="Immutable Backup",
                status="Success",
                date="2025/06/01",
                description="ランサムウェア対策済みの不変ストレージへのバックアップ完了を確認。",
                category=EvidenceCategory.STORAGE,
            ),
            EvidenceItem(
                id="ev2",
                title="EDR / Antivirus",
                status="Active",
                date="2025/06/01",
                description="全エンドポイントにて最新のシグネチャ適用を確認。未検知の脅威なし。",
                category=EvidenceCategory.SECURITY,
            ),
            EvidenceItem(
                id="ev3",
                title="Quarterly Restore Test",
                status="Verified",
                date="2025/05/28",
                description="四半期復元テストを実施。ランダムな10ファイルをリストアし、ハッシュ値の一致を確認。",
                category=EvidenceCategory.ACTIVITY,
            ),
        ),
        news=(
            NewsItem(
                id="n1",
                title="スマートフォンの位置情報を悪用した標的型攻撃",
                date="2025/12/20",
                source="Global Cyber Security Watch",
                content="商用OSの脆弱性を突き、位置情報やマイク音声を盗聴するスパイウェアが確認されています。",
                impact="【貴社への影響】Re:Veil (GrapheneOS) はトラッキング防止機能が強化されており、影響を受けません。",
            ),
            NewsItem(
                id="n2",
                title="ランサムウェアによるNAS機器への攻撃激化",
                date="2025/12/15",
                source="TechDefense Report",
                content="未修正の脆弱性を放置したNAS機器がバックアップデータごと暗号化される被害が多発しています。",
                impact="【貴社への影響】Re:NAS には定期的な自動アップデートが適用されており、脆弱性は解消済みです。",
            ),
            NewsItem(
                id="n3",
                title="Webサイト改ざん攻撃のトレンド変化",
                date="2025/12/10",
                source="WebSec Journal",
                content="CMSのプラグイン脆弱性を狙ったWebサイト改ざん攻撃が増えています。",
                impact="【貴社への影響】貴社HPは静的サイト中心の構成であり、リスクは極めて限定的です。",
            ),
        ),
        changes=(
            ChangeLogEntry(
                id="1",
                date="05/10",
                type="定期メンテ",
                content="Re:NAS セキュリティパッチ適用 (Debian Security Update)",
                result="完了",
                owner="山田",
            ),
            ChangeLogEntry(
                id="2",
                date="05/15",
                type="設定変更",
                content="Re:Veil 新規セットアップ (1台) - キッティング実施",
                result="完了",
                owner="鈴木",
            ),
            ChangeLogEntry(
                id="3",
                date="05/20",
                type="予防保守",
                content="Re:NAS ZFS Scrub実行および整合性チェック",
                result="正常",
                owner="System",
            ),
            ChangeLogEntry(
                id="4",
                date="05/25",
                type="Web更新",
                content="HP お知らせ情報の更新作業 (Git Deploy)",
                result="完了",
                owner="佐藤",
            ),
            ChangeLogEntry(
                id="5",
                date="05/28",
                type="監査",
                content="月次ログ監査およびレポート作成",
                result="完了",
                owner="山田",
            ),
        ),
        roadmap=Roadmap(
            next_month_plan=(
                "・Re:Veil OSアップデート: GrapheneOS大型アップデートに向けた検証を実施します。\n"
                "・Re:NAS 容量監査: スナップショットの古い世代のクリーンアップを実施予定です。"
            ),
            strategic_advice=(
                "■ スマートフォン (Re:Veil) の追加導入について\n"
                "現在の管理サーバー構成で最大50台まで収容可能です。\n\n"
                "■ ゼロトラスト環境へのステップアップ\n"
                "デバイス証明書を用いた認証方式（mTLS）の導入を来期予算でご提案します。"
            ),
        ),
        invoice=Invoice(
            invoice_number="INV-2025-0501",
            issue_date="2025-06-01",
            due_date="2025-06-30",
            currency=Currency.USD,
            tax_rate_percent=0,
            logo_src=None,
            sender=Party(name="KAKEHASHI ASIA inc.", details="Chiba, Japan\nContact: support@example.com"),
            client=Party(name="Client Corp (Global)", details="Manila, Philippines\nAttn: Finance Dept"),
            bank=BankInfo(
                name="Mizuho Bank, Ltd.",
                branch="Marunouchi Branch",
                swift="MHCBJPJT",
                account_type="Savings",
                account_number="1234567890",
                holder="KAKEHASHI ASIA INC",
            ),
            notes="Please remit payment in USD. Bank transfer fees shall be borne by the payer.",
            items=(
                LineItem(id="1", description="Monthly Security Consulting Fee (Basic Plan)", quantity=1, unit_price=4500),
                LineItem(id="2", description="Re:Veil Management License (May Usage)", quantity=2, unit_price=45),
                LineItem(id="3", description="Re:NAS Maintenance Support", quantity=1, unit_price=250),
            ),
        ),
    )
