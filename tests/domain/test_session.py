"""
Tests for the editing session

Tests path updates, list insert/remove, identifier allocation, logo storage
and snapshot isolation.
"""

import threading
from dataclasses import replace

import pytest

from report_studio.domain.document import Asset, AssetStatus, Currency, HealthScore, LineItem, NewsItem
from report_studio.domain.errors import IndexOutOfRangeError, InvalidPathError, UnsupportedOperationError
from report_studio.domain.session import EditingSession, list_spec, read_field, update_field


class TestUpdate:
    """Tests for EditingSession.update()"""

    def test_scalar_field(self, session):
        """Test replacing a scalar field publishes a new snapshot"""
        before = session.snapshot
        after = session.update("meta.month", "06")

        assert after.meta.month == "06"
        assert session.snapshot is after
        assert before.meta.month == "05"

    def test_untouched_sections_are_shared(self, session):
        """Test sections outside the edited path are reused"""
        before = session.snapshot
        after = session.update("meta.client_name", "Acme")

        assert after.summary is before.summary
        assert after.invoice is before.invoice
        assert after.meta is not before.meta

    def test_nested_field(self, session):
        """Test editing a field two levels deep"""
        document = session.update("invoice.bank.swift", "BOTKJPJT")
        assert document.invoice.bank.swift == "BOTKJPJT"

    def test_enum_from_string(self, session):
        """Test enum fields accept their value strings"""
        document = session.update("summary.score", "B")
        assert document.summary.score is HealthScore.B

        document = session.update("invoice.currency", "JPY")
        assert document.invoice.currency is Currency.JPY

    def test_enum_rejects_unknown_value(self, session):
        """Test an unknown enum value leaves the snapshot untouched"""
        before = session.snapshot
        with pytest.raises(ValueError):
            session.update("invoice.currency", "EUR")
        assert session.snapshot is before

    def test_list_member_by_identifier(self, session):
        """Test addressing an identity-bearing list member by id"""
        document = session.update("assets[NAS-01].status", "Warning")
        nas = next(asset for asset in document.assets if asset.id == "NAS-01")
        assert nas.status is AssetStatus.WARNING

    def test_list_member_by_index(self, session):
        """Test addressing a list without identifiers by index"""
        document = session.update("threat_stats[0].count", 9000)
        assert document.threat_stats[0].count == 9000
        assert document.threat_stats[1].count == 1200

    def test_invoice_item(self, session):
        """Test editing an invoice line through its identifier"""
        document = session.update("invoice.items[1].quantity", 3)
        assert document.invoice.items[0].quantity == 3

    def test_resource_value(self, session):
        """Test editing a monthly resource value"""
        document = session.update("resource_stats.cpu[3].value", 70)
        assert document.resource_stats.cpu[3].value == 70
        assert document.resource_stats.cpu[3].month == "4月"

    def test_resource_month_is_read_only(self, session):
        """Test the month label of a resource value cannot be edited"""
        with pytest.raises(InvalidPathError, match="read-only"):
            session.update("resource_stats.cpu[3].month", "April")

    def test_identifier_is_not_editable(self, session):
        """Test identifiers cannot be changed through update"""
        with pytest.raises(InvalidPathError, match="identifiers"):
            session.update("assets[NAS-01].id", "NAS-02")

    @pytest.mark.parametrize(
        "path",
        ["meta.nope", "nope", "meta", "assets", "invoice.items", "meta..month", "meta.month[0]", "assets[NAS-01]"],
    )
    def test_invalid_paths(self, session, path):
        """Test paths that do not name an editable scalar field"""
        before = session.snapshot
        with pytest.raises(InvalidPathError):
            session.update(path, "x")
        assert session.snapshot is before

    @pytest.mark.parametrize("path", ["assets[NAS-99].status", "threat_stats[5].count", "threat_stats[-1].count"])
    def test_unresolved_list_keys(self, session, path):
        """Test identifiers and indices that do not resolve"""
        with pytest.raises(IndexOutOfRangeError):
            session.update(path, "Warning")


class TestUpdateItem:
    """Tests for EditingSession.update_item()"""

    def test_by_identifier(self, session):
        """Test updating a line item by identifier"""
        document = session.update_item("invoice.items", "2", "unit_price", 50)
        assert document.invoice.items[1].unit_price == 50

    def test_by_index(self, session):
        """Test updating a fixed list member by index"""
        document = session.update_item("threat_stats", 4, "count", 0)
        assert document.threat_stats[4].count == 0

    def test_fixed_list_members_are_editable(self, session):
        """Test evidence entries can be edited even though the list is fixed-size"""
        document = session.update_item("evidence", "ev2", "status", "Inactive")
        assert document.evidence[1].status == "Inactive"

    def test_unknown_member(self, session):
        """Test an unknown identifier"""
        with pytest.raises(IndexOutOfRangeError, match="no entry with id 'x9'"):
            session.update_item("news", "x9", "title", "t")

    def test_unknown_field(self, session):
        """Test a field the entity does not have"""
        with pytest.raises(InvalidPathError):
            session.update_item("news", "n1", "headline", "t")


class TestInsert:
    """Tests for EditingSession.insert()"""

    def test_blank_line_item(self, session):
        """Test inserting a blank invoice line"""
        document = session.insert("invoice.items")
        item = document.invoice.items[-1]

        assert len(document.invoice.items) == 4
        assert item.id == "i4"
        assert item.quantity == 1
        assert item.unit_price == 0

    def test_blank_asset(self, session):
        """Test inserting an asset from the template"""
        document = session.insert("assets")
        asset = document.assets[-1]

        assert asset.id == "MOB-005"
        assert asset.host_name == "Re:Veil-New"
        assert asset.os == "GrapheneOS"
        assert asset.status is AssetStatus.HEALTHY
        assert asset.kind == "mobile"

    def test_blank_change_uses_reporting_month(self, session):
        """Test a new change log entry is dated in the reporting month"""
        session.update("meta.month", "06")
        document = session.insert("changes")
        assert document.changes[-1].date == "06/XX"
        assert document.changes[-1].id == "c6"

    def test_supplied_entity_gets_fresh_identifier(self, session):
        """Test a supplied entity is stored under a generated identifier"""
        entity = NewsItem(id="n-extra", title="Patch Tuesday", date="2025/06/10")
        document = session.insert("news", entity)

        assert document.news[-1].id == "n4"
        assert document.news[-1] == replace(entity, id="n4")

    def test_supplied_entity_with_taken_identifier(self, session):
        """Test a colliding identifier is replaced"""
        entity = LineItem(id="1", description="Extra hours", quantity=3, unit_price=100)
        document = session.insert("invoice.items", entity)

        ids = [item.id for item in document.invoice.items]
        assert len(ids) == len(set(ids))
        assert document.invoice.items[-1].description == "Extra hours"

    def test_supplied_entity_without_identifier(self, session):
        """Test an empty identifier is filled in"""
        document = session.insert("assets", Asset(id="", host_name="Re:Veil-User03", role="phone", os="GrapheneOS"))
        assert document.assets[-1].id.startswith("MOB-")

    def test_identifiers_are_never_reused(self, session):
        """Test a removed identifier is not handed out again"""
        first = session.insert("invoice.items").invoice.items[-1].id
        session.remove("invoice.items", first)
        second = session.insert("invoice.items").invoice.items[-1].id

        assert first != second

    def test_repeated_inserts_are_unique(self, session):
        """Test many inserts never produce duplicate identifiers"""
        for _ in range(20):
            session.insert("news")
        ids = [item.id for item in session.snapshot.news]
        assert len(ids) == 23
        assert len(set(ids)) == 23

    def test_counter_starts_past_highest_identifier(self, document):
        """Test numbering continues after the highest numbered identifier of the starting document"""
        news = (NewsItem(id="n1", title="a", date=""), NewsItem(id="n7", title="b", date=""))
        session = EditingSession(replace(document, news=news))

        assert session.insert("news").news[-1].id == "n8"

    def test_removed_identifier_not_reissued_before_first_insert(self, session):
        """Test removing the last member before any insert does not free its identifier"""
        session.remove("news", "n3")
        document = session.insert("news")

        assert document.news[-1].id == "n4"
        assert [item.id for item in document.news] == ["n1", "n2", "n4"]

    def test_removed_high_identifier_not_reissued(self, document):
        """Test a removed identifier above the list length is not handed out again"""
        news = (NewsItem(id="n1", title="a", date=""), NewsItem(id="n5", title="b", date=""))
        session = EditingSession(replace(document, news=news))
        session.remove("news", "n5")

        ids = [session.insert("news").news[-1].id for _ in range(5)]
        assert "n5" not in ids

    def test_wrong_entity_type(self, session):
        """Test inserting an entity of another type"""
        with pytest.raises(TypeError):
            session.insert("news", LineItem(id="x", description="wrong list"))

    @pytest.mark.parametrize("list_name", ["evidence", "threat_stats", "resource_stats.cpu", "resource_stats.storage"])
    def test_fixed_size_lists(self, session, list_name):
        """Test fixed-size lists reject inserts"""
        with pytest.raises(UnsupportedOperationError):
            session.insert(list_name)

    def test_unknown_list(self, session):
        """Test an unknown list name"""
        with pytest.raises(InvalidPathError):
            session.insert("attachments")

    def test_concurrent_inserts(self, session):
        """Test inserts from several threads are all kept with unique identifiers"""
        threads = [threading.Thread(target=lambda: [session.insert("changes") for _ in range(10)]) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [entry.id for entry in session.snapshot.changes]
        assert len(ids) == 45
        assert len(set(ids)) == 45


class TestRemove:
    """Tests for EditingSession.remove_at() and remove()"""

    def test_remove_at(self, session):
        """Test positional removal keeps the order of the rest"""
        document = session.remove_at("news", 0)
        assert [item.id for item in document.news] == ["n2", "n3"]

    def test_remove_at_last(self, session):
        """Test removing the last element"""
        document = session.remove_at("invoice.items", 2)
        assert [item.id for item in document.invoice.items] == ["1", "2"]

    @pytest.mark.parametrize("index", [3, 100, -1])
    def test_remove_at_out_of_range(self, session, index):
        """Test invalid positions leave the document unchanged"""
        before = session.snapshot
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            session.remove_at("news", index)

        assert session.snapshot is before
        assert exc_info.value.length == 3
        assert isinstance(exc_info.value, IndexError)

    def test_remove_until_empty(self, session):
        """Test a list can be emptied and then rejects further removals"""
        for _ in range(3):
            session.remove_at("news", 0)
        assert session.snapshot.news == ()
        with pytest.raises(IndexOutOfRangeError):
            session.remove_at("news", 0)

    def test_remove_by_identifier(self, session):
        """Test identifier-keyed removal"""
        document = session.remove("assets", "WEB-01")
        assert [asset.id for asset in document.assets] == ["NAS-01", "MOB-001", "MOB-002"]

    def test_remove_unknown_identifier(self, session):
        """Test removing an identifier that is not present"""
        with pytest.raises(IndexOutOfRangeError):
            session.remove("assets", "WEB-99")

    def test_fixed_size_list(self, session):
        """Test fixed-size lists reject removal"""
        with pytest.raises(UnsupportedOperationError):
            session.remove_at("evidence", 0)


class TestSetLogo:
    """Tests for EditingSession.set_logo()"""

    def test_bytes_become_data_uri(self, session):
        """Test raw bytes are wrapped in a base64 data URI"""
        document = session.set_logo(b"\x89PNG")
        assert document.invoice.logo_src == "data:image/png;base64,iVBORw=="

    def test_mime_type(self, session):
        """Test the media type of the data URI"""
        document = session.set_logo(b"<svg/>", mime_type="image/svg+xml")
        assert document.invoice.logo_src.startswith("data:image/svg+xml;base64,")

    def test_reference_stored_verbatim(self, session):
        """Test string references are not decoded or validated"""
        document = session.set_logo("https://example.com/logo.png")
        assert document.invoice.logo_src == "https://example.com/logo.png"

    def test_clear(self, session):
        """Test None removes the logo"""
        session.set_logo(b"\x89PNG")
        assert session.set_logo(None).invoice.logo_src is None


class TestPureFunctions:
    """Tests for the module-level snapshot functions"""

    def test_update_field_leaves_input_untouched(self, document):
        """Test update_field returns a new document"""
        updated = update_field(document, "roadmap.next_month_plan", "Nothing planned")
        assert updated.roadmap.next_month_plan == "Nothing planned"
        assert document.roadmap.next_month_plan != "Nothing planned"

    def test_read_field(self, document):
        """Test reading values with the update path syntax"""
        assert read_field(document, "meta.year") == "2025"
        assert read_field(document, "assets[MOB-002].host_name") == "Re:Veil-User02"
        assert read_field(document, "resource_stats.storage[4].value") == 50

    def test_plain_segments_are_not_list_keys(self, document):
        """Test dotted paths without brackets address fields, not list members"""
        updated = update_field(document, "invoice.logo_src", "data:image/png;base64,AA==")

        assert updated.invoice.logo_src == "data:image/png;base64,AA=="
        assert update_field(document, "threat_stats[0].count", 1).threat_stats[0].count == 1
        assert read_field(updated, "invoice.logo_src") == "data:image/png;base64,AA=="

    def test_read_unknown_field(self, document):
        """Test reading a missing field"""
        with pytest.raises(InvalidPathError):
            read_field(document, "meta.quarter")

    def test_list_spec(self):
        """Test list rules lookup"""
        assert list_spec("invoice.items").mutable is True
        assert list_spec("evidence").mutable is False
        with pytest.raises(UnsupportedOperationError):
            list_spec("threat_stats", mutating=True)
