"""Denormalized label cache for taggable models.

Models using :class:`LabelCacheMixin` keep their labels as a comma-separated
string in ``cached_label_list`` so list views can render labels without
joining the tagging tables.
"""

from typing import Iterable, List, Optional

from sqlalchemy import event, inspect
from sqlalchemy.orm.attributes import flag_dirty

from app.utils.logging import get_logger

logger = get_logger(__name__)

LABEL_DELIMITER = ","


def parse_label_list(value: Optional[str]) -> List[str]:
    """Split a cached label string into labels.

    Blank entries are dropped and duplicates removed, keeping first
    occurrence order.
    """
    if not value:
        return []
    return normalize_labels(value.split(LABEL_DELIMITER))


def normalize_labels(labels: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for label in labels:
        label = label.strip()
        if label and label not in seen:
            seen.add(label)
            result.append(label)
    return result


def format_label_list(labels: Iterable[str]) -> Optional[str]:
    """Join labels into the cached form, None when there are no labels."""
    normalized = normalize_labels(labels)
    if not normalized:
        return None
    return f"{LABEL_DELIMITER} ".join(normalized)


class LabelCacheMixin:
    """Adds a ``label_list`` accessor backed by ``cached_label_list``.

    Assigned labels are held on the instance until flush, when the mapper
    listeners installed by :func:`install_label_cache` write them to the
    column.
    """

    @property
    def label_list(self) -> List[str]:
        pending = self.__dict__.get("_pending_labels")
        if pending is not None:
            return list(pending)
        return parse_label_list(self.cached_label_list)

    @label_list.setter
    def label_list(self, labels: Iterable[str]) -> None:
        self.__dict__["_pending_labels"] = normalize_labels(labels)
        # No column changes yet; make sure the flush still visits this row
        flag_dirty(self)

    def refresh_cached_labels(self) -> None:
        """Write pending labels to ``cached_label_list``."""
        pending = self.__dict__.pop("_pending_labels", None)
        if pending is not None:
            self.cached_label_list = format_label_list(pending)


def _sync_cached_labels(mapper, connection, target) -> None:
    target.refresh_cached_labels()


def install_label_cache(model) -> bool:
    """Register label cache listeners on a model.

    Safe to call more than once.

    Args:
        model: Mapped model class.

    Returns:
        False when the model cannot cache labels (no mixin or no
        ``cached_label_list`` column), True otherwise.
    """
    if not (isinstance(model, type) and issubclass(model, LabelCacheMixin)):
        logger.warning(
            "%s does not support label caching, skipping install",
            getattr(model, "__name__", model),
        )
        return False

    if "cached_label_list" not in inspect(model).columns:
        logger.warning(
            "%s has no cached_label_list column, skipping install", model.__name__
        )
        return False

    for identifier in ("before_insert", "before_update"):
        if not event.contains(model, identifier, _sync_cached_labels):
            event.listen(model, identifier, _sync_cached_labels)
    return True
