"""Enrichment subpackage: derive searchable token sets from profile rows."""

from alumsearch.enrichment.fields import BUCKET_FIELDS, CATCH_ALL_FIELDS, ExtractionMode
from alumsearch.enrichment.pipeline import enrich, enrich_record

__all__ = [
    "BUCKET_FIELDS",
    "CATCH_ALL_FIELDS",
    "ExtractionMode",
    "enrich",
    "enrich_record",
]
