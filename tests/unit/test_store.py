"""
Unit Tests - Metric Store
"""
from datetime import date

import pytest

from agency_dashboard.core.exceptions import InvalidRange, NotFoundError, ValidationError
from agency_dashboard.core.models import MetricRecordCreate, ShopCreate
from agency_dashboard.storage import MetricStore, seed_sample_data


def new_shop(store, share=None, name="Home Expo"):
    return store.create_shop(
        ShopCreate(name=name, platform="TikTok", region="USA", profit_share_percentage=share)
    )


class TestShopLifecycle:
    """Tests for shop create/update/delete"""

    def test_default_share_is_50(self, store):
        assert new_shop(store).profit_share_percentage == 50

    @pytest.mark.parametrize("share", [0, 100, 37.5])
    def test_boundary_shares_accepted(self, store, share):
        assert new_shop(store, share).profit_share_percentage == share

    @pytest.mark.parametrize("share", [150, -5, 100.01, float("nan"), "abc"])
    def test_out_of_range_share_rejected(self, store, share):
        with pytest.raises(ValidationError):
            new_shop(store, share)
        assert store.list_shops() == []

    def test_blank_name_rejected(self, store):
        with pytest.raises(ValidationError):
            new_shop(store, name="  ")

    def test_ids_never_reused(self, store):
        first = new_shop(store)
        store.delete_shop(first.id)
        second = new_shop(store)

        assert second.id == first.id + 1

    def test_update_profit_share_replaces_shop(self, store):
        shop = new_shop(store, 40)
        updated = store.update_profit_share(shop.id, 70)

        assert updated.profit_share_percentage == 70
        assert store.get_shop(shop.id) == updated
        assert shop.profit_share_percentage == 40

    @pytest.mark.parametrize("share", [101, -1])
    def test_update_profit_share_validates(self, store, share):
        shop = new_shop(store, 40)

        with pytest.raises(ValidationError):
            store.update_profit_share(shop.id, share)
        assert store.get_shop(shop.id).profit_share_percentage == 40

    def test_update_unknown_shop(self, store):
        with pytest.raises(NotFoundError):
            store.update_profit_share(99, 10)

    def test_update_sheet_source(self, store):
        shop = new_shop(store)
        updated = store.update_sheet_source(shop.id, "sheet-123", "March")

        assert updated.sheet_id == "sheet-123"
        assert updated.sheet_name == "March"

    def test_get_unknown_shop(self, store):
        with pytest.raises(NotFoundError):
            store.get_shop(42)

    def test_delete_unknown_shop(self, store):
        with pytest.raises(NotFoundError):
            store.delete_shop(42)


class TestMetricRecords:
    """Tests for record storage and retrieval"""

    def test_record_for_unknown_shop_rejected(self, store):
        with pytest.raises(NotFoundError):
            store.add_record(MetricRecordCreate(shop_id=7, date=date(2024, 3, 10)))

    def test_list_records_filters(self, two_shop_store):
        assert len(two_shop_store.list_records()) == 3
        assert len(two_shop_store.list_records(shop_id=1)) == 2
        assert len(two_shop_store.list_records(start=date(2024, 3, 10))) == 2
        assert len(two_shop_store.list_records(end=date(2024, 3, 9))) == 1
        assert len(two_shop_store.list_records(shop_id=2, start=date(2024, 3, 10), end=date(2024, 3, 10))) == 1

    def test_list_records_rejects_reversed_bounds(self, two_shop_store):
        with pytest.raises(InvalidRange):
            two_shop_store.list_records(start=date(2024, 3, 10), end=date(2024, 3, 1))

    @pytest.mark.parametrize("field", ["revenue", "cost", "profit", "roi"])
    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_values_rejected(self, two_shop_store, field, value):
        data = MetricRecordCreate(shop_id=1, date=date(2024, 3, 10), **{field: value})

        with pytest.raises(ValidationError):
            two_shop_store.add_record(data)
        assert len(two_shop_store) == 3

    @pytest.mark.parametrize("field", ["revenue", "cost", "orders"])
    def test_negative_amounts_rejected(self, two_shop_store, field):
        with pytest.raises(ValidationError):
            two_shop_store.add_record(MetricRecordCreate(shop_id=1, date=date(2024, 3, 10), **{field: -1}))

    def test_batch_with_invalid_record_stores_nothing(self, two_shop_store):
        batch = [
            MetricRecordCreate(shop_id=1, date=date(2024, 3, 8), revenue=10),
            MetricRecordCreate(shop_id=1, date=date(2024, 3, 7), revenue=float("inf")),
        ]

        with pytest.raises(ValidationError):
            two_shop_store.add_records(batch)
        assert len(two_shop_store) == 3

    def test_records_are_immutable(self, two_shop_store):
        record = two_shop_store.list_records()[0]

        with pytest.raises(AttributeError):
            record.revenue = 0

    def test_delete_cascades_to_records(self, two_shop_store):
        removed = two_shop_store.delete_shop(1)

        assert removed == 2
        assert len(two_shop_store) == 1
        assert all(r.shop_id == 2 for r in two_shop_store.list_records())

    def test_delete_without_cascade_hides_records(self):
        store = MetricStore(cascade_delete=False)
        shop = new_shop(store)
        store.add_record(MetricRecordCreate(shop_id=shop.id, date=date(2024, 3, 10), revenue=10))

        assert store.delete_shop(shop.id) == 0
        assert len(store) == 1
        assert store.list_records() == []


class TestSeed:
    """Tests for sample data seeding"""

    def test_seed_populates_empty_store(self, store, today):
        created = seed_sample_data(store, today=today)

        assert created == 5
        assert [s.name for s in store.list_shops()][0] == "Home Expo"
        assert store.get_shop(1).profit_share_percentage == 40
        assert len(store.list_records(start=today, end=today)) == 4

    def test_seed_skips_populated_store(self, two_shop_store, today):
        assert seed_sample_data(two_shop_store, today=today) == 0
        assert len(two_shop_store.list_shops()) == 2
