import datetime
from enum import Enum

from sqlalchemy import BigInteger, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class ChatType(str, Enum):
    PRIVATE = 'private'
    GROUP = 'group'


# v1 (MariaDB)

class LegacyBase(DeclarativeBase):
    pass


class User(LegacyBase):
    __tablename__ = "users"

    # v1 keys both tables on (id, user_id) / (id, chat_id)
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    last_used: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    updated_at: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    deleted_at: Mapped[datetime.datetime | None] = mapped_column(DateTime)


class GroupSettings(LegacyBase):
    __tablename__ = "group_settings"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    chat_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    nsfw: Mapped[bool | None] = mapped_column(Boolean)
    captions: Mapped[bool | None] = mapped_column(Boolean)
    media_group_limit: Mapped[int] = mapped_column(Integer)
    silent: Mapped[bool | None] = mapped_column(Boolean)
    created_at: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    updated_at: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    deleted_at: Mapped[datetime.datetime | None] = mapped_column(DateTime)


# v2 (PostgreSQL)

class Base(DeclarativeBase):
    pass


class Chat(Base):
    __tablename__ = "chat"

    chat_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    type: Mapped[str] = mapped_column(String(16))
    created_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True))
    settings: Mapped['Settings'] = relationship(back_populates='chat')


class Settings(Base):
    __tablename__ = "settings"

    chat_id: Mapped[int] = mapped_column(ForeignKey('chat.chat_id'), primary_key=True, autoincrement=False)
    chat: Mapped['Chat'] = relationship(back_populates='settings')
    nsfw: Mapped[bool] = mapped_column(Boolean)
    media_album_limit: Mapped[int] = mapped_column(Integer)
    captions: Mapped[bool] = mapped_column(Boolean)
    silent: Mapped[bool] = mapped_column(Boolean)
    language: Mapped[str] = mapped_column(String(8))
    created_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True))
