"""Bind GeoJSON ``FeatureCollection`` documents into feed entries."""

from __future__ import annotations

from pydantic import ValidationError

from incidentsync.domain.model import DateStyle, FeedDecodeError, FeedEntry

from .schema import FeatureCollectionPayload, FeaturePayload


def parse_geojson(content: bytes, *, source: str = "<geojson>") -> list[FeedEntry]:
    try:
        collection = FeatureCollectionPayload.model_validate_json(content)
    except ValidationError as exc:
        raise FeedDecodeError(source, str(exc)) from exc
    return [entry_from_feature(feature) for feature in collection.features]


def entry_from_feature(feature: FeaturePayload) -> FeedEntry:
    properties = feature.properties
    return FeedEntry(
        geometry=feature.geometry,
        guid=properties.guid,
        title=properties.title,
        link=properties.link,
        category=properties.category,
        pub_date=properties.pub_date,
        description=properties.description,
        date_style=DateStyle.SLASHED,
    )
