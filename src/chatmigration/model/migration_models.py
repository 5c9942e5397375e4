from datetime import datetime

from pydantic import BaseModel

from chatmigration.model.db_models import ChatType, User, GroupSettings

DEFAULT_LANGUAGE = 'XX'
DEFAULT_MEDIA_ALBUM_LIMIT = 10

DEFAULT_NSFW = False
DEFAULT_CAPTIONS = True
DEFAULT_SILENT = False


class OptionalFlag(BaseModel):
    """
    A nullable v1 boolean together with the value it stands for when unset.

    v1 stores NULL for settings the group never touched; v2 has no NULLs, so
    every flag carries its own default and ``resolve()`` gives the effective value.
    """
    value: bool | None = None
    default: bool

    def resolve(self) -> bool:
        if self.value is not None:
            return self.value
        return self.default


class ChatRow(BaseModel):
    chat_id: int
    type: ChatType
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_user(cls, user: User) -> 'ChatRow':
        return cls(chat_id=user.user_id,
                   type=ChatType.PRIVATE,
                   created_at=user.created_at,
                   updated_at=user.updated_at)

    @classmethod
    def from_group_settings(cls, group: GroupSettings) -> 'ChatRow':
        return cls(chat_id=group.chat_id,
                   type=ChatType.GROUP,
                   created_at=group.created_at,
                   updated_at=group.updated_at)

    def to_values(self) -> dict:
        values = self.model_dump()
        values['type'] = self.type.value
        return values


class SettingsRow(BaseModel):
    chat_id: int
    nsfw: bool
    media_album_limit: int
    captions: bool
    silent: bool
    language: str
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_user(cls, user: User) -> 'SettingsRow':
        # 개인 채팅은 v1에 설정이 없으므로 항상 기본값
        return cls(chat_id=user.user_id,
                   nsfw=DEFAULT_NSFW,
                   media_album_limit=DEFAULT_MEDIA_ALBUM_LIMIT,
                   captions=DEFAULT_CAPTIONS,
                   silent=DEFAULT_SILENT,
                   language=DEFAULT_LANGUAGE,
                   created_at=user.created_at,
                   updated_at=user.updated_at)

    @classmethod
    def from_group_settings(cls, group: GroupSettings) -> 'SettingsRow':
        nsfw = OptionalFlag(value=group.nsfw, default=DEFAULT_NSFW)
        captions = OptionalFlag(value=group.captions, default=DEFAULT_CAPTIONS)
        silent = OptionalFlag(value=group.silent, default=DEFAULT_SILENT)

        return cls(chat_id=group.chat_id,
                   nsfw=nsfw.resolve(),
                   media_album_limit=group.media_group_limit,
                   captions=captions.resolve(),
                   silent=silent.resolve(),
                   language=DEFAULT_LANGUAGE,
                   created_at=group.created_at,
                   updated_at=group.updated_at)

    def to_values(self) -> dict:
        return self.model_dump()
