import pytest

from shop_admin.services.variation_reconciler import (
    VariationInUseError,
    get_deleted_variations,
    get_existing_variations,
    get_new_variations,
    reconcile_variations,
)


PERSISTED = [
    {"_id": "a", "color_id": "c1", "size_id": "s1", "quantity": 1},
    {"_id": "b", "color_id": "c1", "size_id": "s2", "quantity": 2},
    {"_id": "c", "color_id": "c1", "size_id": "s3", "quantity": 3},
]


def no_orders(ids):
    return []


def orders_for(mapping):
    """mapping: variation id -> delivered flag of the order using it"""
    def find(ids):
        return [
            {"product_variation_id": vid, "order": {"delivered": delivered}}
            for vid, delivered in mapping.items()
            if vid in ids
        ]
    return find


def test_classifies_new_existing_and_removed():
    incoming = [
        {"id": "a", "color_id": "c1", "size_id": "s1", "quantity": 9},
        {"id": None, "color_id": "c2", "size_id": "s1", "quantity": 1},
    ]

    assert get_new_variations(PERSISTED, incoming) == [incoming[1]]
    assert get_existing_variations(PERSISTED, incoming) == [incoming[0]]
    assert [v["_id"] for v in get_deleted_variations(PERSISTED, incoming)] == ["b", "c"]


def test_unknown_ids_are_ignored():
    incoming = [{"id": "zzz", "color_id": "c1", "size_id": "s1"}]

    assert get_existing_variations(PERSISTED, incoming) == []
    assert get_new_variations(PERSISTED, incoming) == []


def test_unreferenced_removals_are_deleted():
    plan = reconcile_variations(PERSISTED, [{"id": "a"}], no_orders)

    assert plan.delete_ids == ["b", "c"]
    assert plan.disconnect == []


def test_removals_used_by_delivered_orders_are_disconnected():
    plan = reconcile_variations(PERSISTED, [{"id": "a"}], orders_for({"b": True}))

    assert plan.disconnect_ids == ["b"]
    assert plan.delete_ids == ["c"]


def test_removal_used_by_undelivered_order_is_rejected():
    with pytest.raises(VariationInUseError) as excinfo:
        reconcile_variations(PERSISTED, [{"id": "a"}], orders_for({"b": True, "c": False}))

    assert excinfo.value.code == "P2014"
    assert excinfo.value.variation_ids == ["c"]
    assert excinfo.value.message == "Product Variation cannot be deleted because it is used in an order"


def test_missing_parent_order_counts_as_undelivered():
    def find(ids):
        return [{"product_variation_id": "b", "order": None}]

    with pytest.raises(VariationInUseError):
        reconcile_variations(PERSISTED, [{"id": "a"}, {"id": "c"}], find)


def test_nothing_removed_skips_order_lookup():
    def explode(ids):
        raise AssertionError("order lookup should not run")

    plan = reconcile_variations(PERSISTED, [{"id": "a"}, {"id": "b"}, {"id": "c"}], explode)

    assert len(plan.existing) == 3
    assert plan.new == []


def test_removing_everything():
    plan = reconcile_variations(PERSISTED, [], no_orders)

    assert plan.delete_ids == ["a", "b", "c"]
