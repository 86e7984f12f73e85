"""FastAPI application for inferstat.

This module exposes the statistics to a data-exploration front end over HTTP:
descriptive summaries, hypothesis tests, correlations, and DataFrame-style
analyses over lists of records.
"""

from __future__ import annotations

import logging
import math
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import pandas as pd
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from inferstat import __version__
from inferstat.config import get_settings
from inferstat.core import (
    AnalysisFailure,
    anova,
    pearson_correlation,
    quantile,
    summary,
    t_test,
)
from inferstat.tools import compare_groups, correlation_analysis, statistical_analysis

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sized

logger = logging.getLogger(__name__)

# A raw observation as sent by the client; None and "null" mark missing values
RawValue = float | str | None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    logger.info(f"Starting inferstat API ({settings.environment})")
    yield
    logger.info("Shutting down inferstat API")


app = FastAPI(
    title="inferstat API",
    description="Descriptive statistics, hypothesis tests and correlations",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class SummaryRequest(BaseModel):
    """Request body for a sample summary."""

    values: list[RawValue] = Field(..., description="Sample of observations")
    add_quantile: bool = Field(default=False, description="Include 25%/75% quantiles")


class QuantileRequest(BaseModel):
    """Request body for a single quantile."""

    values: list[RawValue] = Field(..., description="Sample of observations")
    q: float = Field(..., ge=0.0, le=1.0, description="Quantile fraction")


class TwoSampleRequest(BaseModel):
    """Request body for tests on two samples."""

    x: list[RawValue] = Field(..., description="First sample")
    y: list[RawValue] = Field(..., description="Second sample")


class AnovaRequest(BaseModel):
    """Request body for a one-way ANOVA."""

    groups: list[list[RawValue]] = Field(..., description="One sample per group")


class RecordsRequest(BaseModel):
    """Request body for column statistics over records."""

    records: list[dict[str, Any]] = Field(..., description="Rows of observations")
    parameters: list[str] | None = Field(default=None, description="Columns to analyse")


class RecordsCorrelationRequest(BaseModel):
    """Request body for a column correlation over records."""

    records: list[dict[str, Any]] = Field(..., description="Rows of observations")
    param_x: str = Field(..., description="First column")
    param_y: str = Field(..., description="Second column")


class RecordsCompareRequest(BaseModel):
    """Request body for a group comparison over records."""

    records: list[dict[str, Any]] = Field(..., description="Rows of observations")
    parameter: str = Field(..., description="Column to compare")
    group_column: str = Field(..., description="Column defining groups")


class TestResponse(BaseModel):
    """Response from a hypothesis test."""

    success: bool
    test: str
    p_value: float | None = None
    error: str | None = None
    reason: str | None = None


class CorrelationResponse(BaseModel):
    """Response from a correlation."""

    success: bool
    r: float | None = None
    p_value: float | None = None
    n: int | None = None
    error: str | None = None
    reason: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


def _finite(value: float | None) -> float | None:
    """Map NaN and infinities to None for JSON output."""
    if value is None or not math.isfinite(value):
        return None
    return float(value)


def _json_safe(obj: Any) -> Any:
    """Recursively replace non-finite floats with None."""
    if isinstance(obj, dict):
        return {key: _json_safe(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_json_safe(value) for value in obj]
    if isinstance(obj, float):
        return _finite(obj)
    return obj


def _check_size(*samples: Sized) -> None:
    """Reject samples larger than the configured limit."""
    limit = get_settings().max_sample_size
    for sample in samples:
        if len(sample) > limit:
            raise HTTPException(
                status_code=413,
                detail=f"Sample of {len(sample)} values exceeds limit of {limit}",
            )


# Endpoints. Computations are plain functions, run in the threadpool.
@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=get_settings().environment,
    )


@app.post("/descriptive/summary")
def describe_sample(request: SummaryRequest) -> dict[str, Any]:
    """Summarise a sample."""
    _check_size(request.values)
    record = summary(request.values, add_quantile=request.add_quantile)
    return _json_safe(record.to_dict())


@app.post("/descriptive/quantile")
def sample_quantile(request: QuantileRequest) -> dict[str, Any]:
    """Compute one quantile of a sample."""
    _check_size(request.values)
    try:
        value = quantile(request.values, request.q)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"q": request.q, "value": _finite(value)}


@app.post("/tests/welch", response_model=TestResponse)
def welch_test(request: TwoSampleRequest) -> TestResponse:
    """Run Welch's t-test on two samples."""
    _check_size(request.x, request.y)
    p_value = t_test(request.x, request.y)
    if math.isnan(p_value):
        return TestResponse(
            success=False,
            test="welch_t_test",
            error="Each sample needs at least 3 valid values and some variation",
            reason="insufficient_data",
        )
    return TestResponse(success=True, test="welch_t_test", p_value=p_value)


@app.post("/tests/anova", response_model=TestResponse)
def anova_test(request: AnovaRequest) -> TestResponse:
    """Run a one-way ANOVA across groups."""
    _check_size(request.groups, *request.groups)
    # Nested lists are enforced by AnovaRequest, so the result is a float
    result = anova(request.groups)
    if math.isnan(result):
        return TestResponse(
            success=False,
            test="one_way_anova",
            error="ANOVA needs at least 2 groups and more than 5 valid values",
            reason="insufficient_data",
        )
    return TestResponse(success=True, test="one_way_anova", p_value=result)


@app.post("/correlation/pearson", response_model=CorrelationResponse)
def pearson(request: TwoSampleRequest) -> CorrelationResponse:
    """Compute the Pearson correlation of two paired samples."""
    _check_size(request.x, request.y)
    result = pearson_correlation(request.x, request.y)
    if isinstance(result, AnalysisFailure):
        return CorrelationResponse(
            success=False,
            error=result.message,
            reason=result.reason.value,
        )
    return CorrelationResponse(
        success=True,
        r=_finite(result.r),
        p_value=_finite(result.p),
        n=result.n,
    )


@app.post("/analysis/statistics")
def run_statistical_analysis(request: RecordsRequest) -> dict[str, Any]:
    """Summarise the columns of a set of records."""
    _check_size(request.records)
    try:
        df = pd.DataFrame.from_records(request.records)
        result = statistical_analysis(df, request.parameters)
        return _json_safe(result.to_dict())
    except Exception as e:
        logger.exception("Statistical analysis failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )


@app.post("/analysis/correlation")
def run_correlation_analysis(request: RecordsCorrelationRequest) -> dict[str, Any]:
    """Correlate two columns of a set of records."""
    _check_size(request.records)
    try:
        df = pd.DataFrame.from_records(request.records)
        result = correlation_analysis(df, request.param_x, request.param_y)
        return _json_safe(result.to_dict())
    except Exception as e:
        logger.exception("Correlation analysis failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )


@app.post("/analysis/compare")
def run_group_comparison(request: RecordsCompareRequest) -> dict[str, Any]:
    """Compare a column across the groups of another column."""
    _check_size(request.records)
    try:
        df = pd.DataFrame.from_records(request.records)
        result = compare_groups(df, request.parameter, request.group_column)
    except Exception as e:
        logger.exception("Group comparison failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    if not result["success"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result["error"],
        )
    return _json_safe(result)
