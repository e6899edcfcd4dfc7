"""Upstream search configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from streamvault.shared.constants import Application, SearchLimits


class SearchSettings(BaseModel):
    """Search orchestration limits.

    Attributes:
        max_results_per_query: Records requested from each search call
        total_max_results: Global unique-candidate cap that stops further calls
        max_concurrency: Variant searches allowed in flight at once (1 = sequential)
        min_file_size_bytes: Smaller files are treated as samples and rejected
        product_label: First line of every stream display name
    """

    max_results_per_query: int = Field(default=SearchLimits.MAX_RESULTS_PER_QUERY, gt=0)
    total_max_results: int = Field(default=SearchLimits.TOTAL_MAX_RESULTS, gt=0)
    max_concurrency: int = Field(default=SearchLimits.DEFAULT_MAX_CONCURRENCY, ge=1, le=16)
    min_file_size_bytes: int = Field(default=SearchLimits.MIN_FILE_SIZE_BYTES, ge=0)
    product_label: str = Field(default=Application.PRODUCT_LABEL, min_length=1)

    @model_validator(mode="after")
    def _check_budget(self) -> SearchSettings:
        if self.total_max_results < self.max_results_per_query:
            msg = (
                f"total_max_results ({self.total_max_results}) must be >= "
                f"max_results_per_query ({self.max_results_per_query})"
            )
            raise ValueError(msg)
        return self
