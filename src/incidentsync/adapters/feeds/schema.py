"""Pydantic models describing GeoJSON incident feed payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_blank(value: object) -> object:
    if value is None:
        return ""
    return value


class FeedBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PropertiesPayload(FeedBaseModel):
    title: str = ""
    link: str = ""
    category: str = ""
    guid: str = ""
    guid_is_permalink: str | None = Field(default=None, alias="guid_isPermaLink")
    pub_date: str = Field(default="", alias="pubDate")
    description: str = ""

    _blank_strings = field_validator(
        "title", "link", "category", "guid", "pub_date", "description", mode="before"
    )(_none_to_blank)


class FeaturePayload(FeedBaseModel):
    type: Literal["Feature"] = "Feature"
    properties: PropertiesPayload = Field(default_factory=PropertiesPayload)
    # kept as a plain mapping: the normalizer owns geometry validation
    geometry: dict[str, Any] | None = None


class CrsPayload(FeedBaseModel):
    type: str
    properties: dict[str, Any] = Field(default_factory=dict)


class FeatureCollectionPayload(FeedBaseModel):
    type: Literal["FeatureCollection"]
    crs: CrsPayload | None = None
    features: list[FeaturePayload] = Field(default_factory=list)
