# shop_admin/services/variation_reconciler.py
"""
Diff an incoming list of product variations against the persisted ones.

    new         incoming records without an id
    existing    incoming records whose id belongs to the product
    disconnect  removed records still referenced by delivered orders
    delete      removed records nobody references

Removing a variation that an undelivered order still references is refused
with VariationInUseError; nothing is classified in that case.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List

from ..constants.service_code import VARIATION_IN_USE_CODE, VARIATION_IN_USE_MESSAGE
from ..utils.logger import Log


class VariationInUseError(Exception):
    """A variation to be removed is referenced by an order not yet delivered."""

    code = VARIATION_IN_USE_CODE

    def __init__(self, variation_ids, message=VARIATION_IN_USE_MESSAGE):
        super().__init__(message)
        self.message = message
        self.variation_ids = list(variation_ids)


@dataclass
class VariationPlan:
    new: List[dict] = field(default_factory=list)
    existing: List[dict] = field(default_factory=list)
    disconnect: List[dict] = field(default_factory=list)
    delete: List[dict] = field(default_factory=list)

    @property
    def disconnect_ids(self):
        return [variation_identity(v) for v in self.disconnect]

    @property
    def delete_ids(self):
        return [variation_identity(v) for v in self.delete]


def variation_identity(record) -> str | None:
    """Persisted records carry `_id`, API payloads carry `id`."""
    value = record.get("id") or record.get("_id")
    return str(value) if value else None


def get_new_variations(persisted: Iterable[dict], incoming: Iterable[dict]) -> List[dict]:
    return [v for v in incoming if not variation_identity(v)]


def get_existing_variations(persisted: Iterable[dict], incoming: Iterable[dict]) -> List[dict]:
    persisted_ids = {variation_identity(v) for v in persisted}
    existing = []
    for variation in incoming:
        identity = variation_identity(variation)
        if not identity:
            continue
        if identity in persisted_ids:
            existing.append(variation)
        else:
            Log.warning(
                f"[variation_reconciler.py][get_existing_variations] "
                f"ignoring variation {identity} that does not belong to the product"
            )
    return existing


def get_deleted_variations(persisted: Iterable[dict], incoming: Iterable[dict]) -> List[dict]:
    incoming_ids = {variation_identity(v) for v in incoming if variation_identity(v)}
    return [v for v in persisted if variation_identity(v) not in incoming_ids]


def reconcile_variations(
    persisted: List[dict],
    incoming: List[dict],
    find_order_items: Callable[[List[str]], List[dict]],
) -> VariationPlan:
    """
    Build the write plan for a product update.

    `find_order_items(ids)` returns the order items referencing any of the
    ids; each item exposes `product_variation_id` and its parent order under
    `order` (with a `delivered` flag).
    """
    plan = VariationPlan(
        new=get_new_variations(persisted, incoming),
        existing=get_existing_variations(persisted, incoming),
    )
    removed = get_deleted_variations(persisted, incoming)
    if not removed:
        return plan

    order_items = find_order_items([variation_identity(v) for v in removed]) or []

    blocking = [
        str(item.get("product_variation_id"))
        for item in order_items
        if not (item.get("order") or {}).get("delivered")
    ]
    if blocking:
        raise VariationInUseError(sorted(set(blocking)))

    referenced = {str(item.get("product_variation_id")) for item in order_items}
    for variation in removed:
        if variation_identity(variation) in referenced:
            plan.disconnect.append(variation)
        else:
            plan.delete.append(variation)
    return plan
