import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import Mapped, declarative_base, declared_attr, mapped_column

Base_ = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(AsyncAttrs, Base_):
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    @declared_attr
    def __table_args__(cls):
        doc = cls.__doc__
        table_args = cls.__dict__.get("table_args", ())
        if doc is None:
            doc = ""
        doc = doc.strip(" \n")
        if len(table_args) == 0:
            table_args = ({"comment": doc},)
        elif isinstance(table_args[-1], dict):
            table_args = (*table_args[:-1], {**table_args[-1], "comment": doc})
        else:
            table_args = (*table_args, {"comment": doc})
        return table_args

    __abstract__ = True


class BaseUUID(Base):
    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        default=uuid.uuid4,
        primary_key=True,
        nullable=False,
        comment="Unique identifier of the row",
    )


class BaseUUIDCreatedAt(BaseUUID):
    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Date of creation of this row",
    )


class BaseUUIDModel(BaseUUIDCreatedAt):
    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Date of the last update to this row",
    )
