"""Marshmallow schemas for pick entries.

Wire names are camelCase (``pickedAt``) for entries and PascalCase
(``Number``) for picks, matching what browser clients already send.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, post_dump, post_load

from lotto_picks.models.entry import Entry, EntryMeta, Pick

# Bump when the persisted entry shape changes; stored as "schemaVersion" on each entry.
SCHEMA_VERSION = 1


class PickSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    number = fields.Integer(data_key="Number", required=True, strict=True)
    is_special = fields.Boolean(data_key="IsSpecial", load_default=False)
    name = fields.Constant(None, data_key="Name")

    @post_load
    def _make_pick(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return Pick(number=data["number"], is_special=bool(data.get("is_special")))


class EntryMetaSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    source_ip = fields.String(data_key="sourceIp", load_default=None, allow_none=True)
    user_agent = fields.String(data_key="userAgent", load_default=None, allow_none=True)

    @post_load
    def _make_meta(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return EntryMeta(**data)

    @post_dump
    def _drop_empty(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return {k: v for k, v in data.items() if v is not None}


class EntrySchema(Schema):
    """Canonical persisted (and returned) entry shape."""

    class Meta:
        unknown = EXCLUDE

    id = fields.String(required=True)
    game = fields.String(required=True)
    picks = fields.List(fields.Nested(PickSchema), required=True)
    played = fields.Boolean(load_default=False)
    picked_at = fields.String(data_key="pickedAt", load_default="")
    played_at = fields.String(data_key="playedAt", load_default=None, allow_none=True)
    meta = fields.Nested(EntryMetaSchema, load_default=None, allow_none=True)
    schema_version = fields.Constant(SCHEMA_VERSION, data_key="schemaVersion")

    @post_load
    def _make_entry(self, data, **kwargs):  # type: ignore[no-untyped-def]
        data.pop("schema_version", None)
        data["picks"] = tuple(data["picks"])
        return Entry(**data)

    @post_dump
    def _drop_unset(self, data, **kwargs):  # type: ignore[no-untyped-def]
        # playedAt is absent (not null) while unplayed.
        if data.get("playedAt") is None:
            data.pop("playedAt", None)
        if data.get("meta") is None:
            data.pop("meta", None)
        return data


class EntryCreateSchema(Schema):
    """Loose shape of a create payload; pick rules live in the validation engine."""

    class Meta:
        unknown = EXCLUDE

    game = fields.Raw(load_default=None, allow_none=True)
    picks = fields.Raw(load_default=None, allow_none=True)
    picked_at = fields.String(data_key="pickedAt", load_default=None, allow_none=True)
    played = fields.Raw(load_default=False, allow_none=True)
