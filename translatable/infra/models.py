from __future__ import annotations

from typing import Any, ClassVar, Iterable, Optional

from sqlalchemy import UniqueConstraint, inspect
from sqlalchemy.orm import DeclarativeBase, InstrumentedAttribute

from ..core.config import settings


class Base(DeclarativeBase):
    pass


class TranslatableMixin:
    """Marks a declarative model as translatable into other locales.

    The model declares the locale and parent id columns itself. Set ``LOCALE``
    and/or ``LOCALE_PARENT_ID`` on the model to use other attribute names;
    unset names fall back to the configured defaults. ``REPLICATE_EXCLUDE``
    lists attributes that a translation must not copy from its source.
    """

    REPLICATE_EXCLUDE: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def get_locale_column(cls) -> str:
        return getattr(cls, "LOCALE", None) or settings.LOCALE_COLUMN

    @classmethod
    def get_locale_parent_id_column(cls) -> str:
        return getattr(cls, "LOCALE_PARENT_ID", None) or settings.LOCALE_PARENT_ID_COLUMN

    @classmethod
    def get_qualified_locale_column(cls) -> str:
        return cls._qualify(cls.get_locale_column())

    @classmethod
    def get_qualified_locale_parent_id_column(cls) -> str:
        return cls._qualify(cls.get_locale_parent_id_column())

    @classmethod
    def get_key_name(cls) -> str:
        mapper = inspect(cls)
        return mapper.get_property_by_column(mapper.primary_key[0]).key

    @classmethod
    def _qualify(cls, key: str) -> str:
        column = inspect(cls).columns[key]
        return f"{column.table.name}.{column.name}"

    # query helpers

    @classmethod
    def locale_attr(cls) -> InstrumentedAttribute:
        return getattr(cls, cls.get_locale_column())

    @classmethod
    def locale_parent_id_attr(cls) -> InstrumentedAttribute:
        return getattr(cls, cls.get_locale_parent_id_column())

    @classmethod
    def key_attr(cls) -> InstrumentedAttribute:
        return getattr(cls, cls.get_key_name())

    # instance accessors

    def get_key(self) -> Any:
        return getattr(self, self.get_key_name())

    def get_locale(self) -> Optional[str]:
        return getattr(self, self.get_locale_column())

    def set_locale(self, locale: str) -> None:
        setattr(self, self.get_locale_column(), locale)

    def get_locale_parent_id(self) -> Any:
        return getattr(self, self.get_locale_parent_id_column())

    def set_locale_parent_id(self, value: Any) -> None:
        setattr(self, self.get_locale_parent_id_column(), value)


def replicate(record: Any, exclude: Iterable[str] = ()) -> Any:
    """Build a new transient instance with the column values of ``record``.

    Primary key attributes are never copied, neither are the names in
    ``exclude`` or in the model's ``REPLICATE_EXCLUDE``.
    """
    mapper = inspect(type(record))
    skip = {mapper.get_property_by_column(col).key for col in mapper.primary_key}
    skip.update(getattr(record, "REPLICATE_EXCLUDE", ()))
    skip.update(exclude)
    values = {
        attr.key: getattr(record, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in skip
    }
    return type(record)(**values)


def group_locale_constraint(
    locale: Optional[str] = None,
    locale_parent_id: Optional[str] = None,
    name: Optional[str] = None,
) -> UniqueConstraint:
    """One row per locale per translation group, for use in ``__table_args__``."""
    return UniqueConstraint(
        locale_parent_id or settings.LOCALE_PARENT_ID_COLUMN,
        locale or settings.LOCALE_COLUMN,
        name=name,
    )
