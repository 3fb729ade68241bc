"""
Prometheus metrics for the UGC document extraction engine.
"""

from prometheus_client import Counter, Histogram


# ── Document Processing ─────────────────────────────────────
documents_processed_total = Counter(
    "ugc_documents_processed_total",
    "Total documents run through the extraction facade",
    ["document_type", "outcome"],
)

extraction_fallbacks_total = Counter(
    "ugc_extraction_fallbacks_total",
    "Extractions that degraded to the empty record",
    ["document_type", "reason"],
)

document_processing_duration_seconds = Histogram(
    "ugc_document_processing_duration_seconds",
    "Time to extract a document end-to-end",
    ["document_type"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1, 5, 10],
)

# ── Fields ───────────────────────────────────────────────────
fields_extracted_total = Counter(
    "ugc_fields_extracted_total",
    "Fields populated on finalized records",
    ["document_type", "field"],
)

amount_corrections_total = Counter(
    "ugc_amount_corrections_total",
    "Implausible amounts handled by the candidate rescan",
    ["result"],
)

template_matches_total = Counter(
    "ugc_template_matches_total",
    "Documents matched against a known template fingerprint",
    ["template_id"],
)
