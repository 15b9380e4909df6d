from __future__ import annotations


def reorder(items, from_index: int, to_index: int) -> list:
    result = list(items)
    if not result:
        return result
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result


def _item_id(item):
    if isinstance(item, dict):
        return item.get("id")
    return getattr(item, "id", item)


def sort_by_order(items, order_ids) -> list:
    if not order_ids:
        return list(items)
    positions = {}
    for index, item_id in enumerate(order_ids):
        positions.setdefault(item_id, index)
    fallback = len(order_ids)
    # sorted() is stable, so unknown ids keep their original relative order
    return sorted(items, key=lambda item: positions.get(_item_id(item), fallback))
