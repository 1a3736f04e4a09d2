"""
Pagination - the fixed page sequence of the printed report

The report always prints as the same eleven A4 pages. Logical sections are
assigned to physical pages by a static table; page breaks are explicit
markers between pages and never depend on how much text an operator typed.
Long lists (assets, evidence, change log, news) grow inside their own page;
overflow is accepted rather than reflowed onto extra pages.

Usage:
    from report_studio.report.pagination import TOTAL_PAGES, paginate

    for page in paginate(document):
        print(page.number, page.header.page_title, page.header.page_label)
"""

from dataclasses import dataclass

from ..domain.document import Document, Meta


@dataclass(frozen=True)
class PageSpec:
    """
    One row of the page table.

    Attributes:
        key: Stable page key, also the template name under templates/pages/
        title: Running title printed in the page header
        sections: Logical sections rendered on the page, in order
        subtitle: Sub-heading printed under the section heading
        section_number: Chapter number shown in the section heading, if any
        show_header: Whether the page header is printed (the cover and the
            self-contained invoice carry header data but do not print it)
        in_toc: Whether the page is listed in the table of contents
    """

    key: str
    title: str
    sections: tuple[str, ...]
    subtitle: str = ""
    section_number: int | None = None
    show_header: bool = True
    in_toc: bool = True


PAGE_TABLE: tuple[PageSpec, ...] = (
    PageSpec("cover", "Cover", ("meta",), show_header=False, in_toc=False),
    PageSpec("toc", "Table of Contents", ("table_of_contents",), in_toc=False),
    PageSpec("summary", "Executive Summary", ("summary",), "Overall Health & Key Highlights", 1),
    PageSpec(
        "statistics",
        "Security Statistics",
        ("threat_stats", "security_analysis"),
        "Threat Detection & Analysis",
        2,
    ),
    PageSpec("assets", "Asset Details", ("assets",), "Detailed Status per Asset", 3),
    PageSpec(
        "performance",
        "Performance Analysis",
        ("resource_stats", "performance"),
        "Capacity Planning & Trends",
        4,
    ),
    PageSpec("evidence", "Operational Evidence", ("evidence",), "Proof of Protection", 5),
    PageSpec("changes", "Change Management", ("changes",), "System Audit Log", 6),
    PageSpec("news", "Global Intelligence", ("news",), "Threat Trends & Risk Analysis", 7),
    PageSpec("roadmap", "Strategic Roadmap", ("roadmap",), "Future Strategy & Recommendations", 8),
    PageSpec("invoice", "Invoice", ("invoice",), show_header=False),
)

TOTAL_PAGES = len(PAGE_TABLE)


@dataclass(frozen=True)
class PageHeader:
    report_title: str
    client_name: str
    company_name: str
    page_title: str
    page_number: int
    total_pages: int

    @property
    def page_label(self) -> str:
        return f"Page {self.page_number} / {self.total_pages}"


@dataclass(frozen=True)
class Page:
    """
    A physical page.

    ``break_after`` is True for every page but the last; the renderer emits
    one explicit page-break marker per such page.
    """

    number: int
    spec: PageSpec
    header: PageHeader
    break_after: bool

    @property
    def key(self) -> str:
        return self.spec.key


@dataclass(frozen=True)
class TocEntry:
    page_number: int
    title: str
    section_number: int | None = None


def report_title(meta: Meta) -> str:
    """Running title for the page header, derived from the reporting period."""
    return f"Monthly System Audit Report - {meta.year}/{meta.month}"


def paginate(document: Document) -> tuple[Page, ...]:
    """
    Lay the document out on the fixed page sequence.

    Args:
        document: Current Document snapshot

    Returns:
        Exactly TOTAL_PAGES pages, numbered from 1, each with a header that
        carries the same report title, client name and page total
    """
    title = report_title(document.meta)
    pages = []
    for number, spec in enumerate(PAGE_TABLE, start=1):
        header = PageHeader(
            report_title=title,
            client_name=document.meta.client_name,
            company_name=document.meta.company_name,
            page_title=spec.title,
            page_number=number,
            total_pages=TOTAL_PAGES,
        )
        pages.append(Page(number=number, spec=spec, header=header, break_after=number < TOTAL_PAGES))
    return tuple(pages)


def table_of_contents() -> tuple[TocEntry, ...]:
    """Table of contents derived from the page table, so page numbers always agree with paginate()."""
    return tuple(
        TocEntry(page_number=number, title=spec.title, section_number=spec.section_number)
        for number, spec in enumerate(PAGE_TABLE, start=1)
        if spec.in_toc
    )

