"""
Data models — enregistrements de contenu + lignes par locale.
SQLAlchemy (SQLite)

content_records       structure (champs non localisés, marqueurs {"$i18n": true})
content_records_i18n  une ligne par locale : champs plats localisés + valeurs imbriquées
"""
import uuid
from datetime import datetime
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class ContentRecordDB(Base):
    __tablename__ = "content_records"
    record_id:  Mapped[str]      = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    collection: Mapped[str]      = mapped_column(sa.String, nullable=False, index=True)
    data:       Mapped[str]      = mapped_column(sa.Text, nullable=False, default="{}")
    created_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    translations: Mapped[List["ContentRecordI18nDB"]] = relationship(
        back_populates="record", cascade="all, delete-orphan")


class ContentRecordI18nDB(Base):
    __tablename__ = "content_records_i18n"
    __table_args__ = (sa.UniqueConstraint("record_id", "locale", name="uq_record_locale"),)

    id:        Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("content_records.record_id"), nullable=False)
    locale:    Mapped[str]           = mapped_column(sa.String, nullable=False)
    fields:    Mapped[str]           = mapped_column(sa.Text, nullable=False, default="{}")
    nested:    Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)

    record: Mapped[ContentRecordDB] = relationship(back_populates="translations")
