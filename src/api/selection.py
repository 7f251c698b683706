"""FastAPI selection endpoints.

GET  /v1/catalog/options            — options allowed by the active content packs
POST /v1/selections/validate        — hard-rule check of a complete candidate set
POST /v1/selections/completable     — legal as-is with a legal completion
POST /v1/selections/unavailable     — options that cannot currently be added
POST /v1/selections/completions     — every legal completion (diagnostics)

Deterministic engine code only. Unknown identifiers map to 422; rule
failures are ordinary 200 responses with ``legal: false``.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from src.api.dependencies import get_catalog, get_rules_service
from src.catalog.catalog import Catalog
from src.engine.rules.errors import UnknownIdentifierError
from src.engine.rules.service import SelectionRulesService
from src.models.common import OptionCategory
from src.models.selection import Selection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/selections", tags=["selections"])
catalog_router = APIRouter(prefix="/v1/catalog", tags=["catalog"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class ValidateRequest(BaseModel):
    options: list[str] = Field(default_factory=list)


class ViolationResponse(BaseModel):
    rule: str
    message: str
    identifiers: list[str]


class ValidateResponse(BaseModel):
    legal: bool
    violations: list[ViolationResponse]


class SelectionRequest(BaseModel):
    origin: str | None = None
    authority: str | None = None
    ethics: list[str] = Field(default_factory=list)
    civics: list[str] = Field(default_factory=list)
    traits: list[str] = Field(default_factory=list)
    habitat: str | None = None
    species_archetype: str | None = None
    active_packs: list[str] = Field(default_factory=list)

    def to_selection(self) -> Selection:
        return Selection(
            origin=self.origin,
            authority=self.authority,
            ethics=frozenset(self.ethics),
            civics=frozenset(self.civics),
            traits=frozenset(self.traits),
            habitat=self.habitat,
            species_archetype=self.species_archetype,
            active_packs=frozenset(self.active_packs),
        )


class CompletableResponse(BaseModel):
    completable: bool


class AvailabilityResponse(BaseModel):
    unavailable: list[str]
    available: list[str]


class CompletionsResponse(BaseModel):
    completions: list[list[str]]
    count: int


class OptionResponse(BaseModel):
    name: str
    category: OptionCategory
    cost: int | None
    requires: list[list[str]]
    prohibits: list[str]
    dlc: list[str]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


def _unknown(exc: UnknownIdentifierError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))


@catalog_router.get("/options", response_model=list[OptionResponse])
async def list_options(
    active_packs: list[str] = Query(default=[]),
    category: OptionCategory | None = None,
    catalog: Catalog = Depends(get_catalog),
) -> list[OptionResponse]:
    """List options allowed by the given content packs."""
    return [
        OptionResponse(
            name=o.name,
            category=o.category,
            cost=o.weighted_cost,
            requires=sorted(sorted(clause) for clause in o.requires),
            prohibits=sorted(o.prohibits),
            dlc=sorted(o.dlc),
        )
        for o in catalog.allowed_options(active_packs)
        if category is None or o.category == category
    ]


@router.post("/validate", response_model=ValidateResponse)
async def validate_selection(
    body: ValidateRequest,
    service: SelectionRulesService = Depends(get_rules_service),
) -> ValidateResponse:
    """Check a complete candidate set against the hard rules."""
    try:
        violations = service.violations(body.options)
    except UnknownIdentifierError as exc:
        raise _unknown(exc) from exc

    return ValidateResponse(
        legal=not violations,
        violations=[
            ViolationResponse(
                rule=v.rule.value,
                message=v.message,
                identifiers=list(v.identifiers),
            )
            for v in violations
        ],
    )


@router.post("/completable", response_model=CompletableResponse)
async def check_completable(
    body: SelectionRequest,
    service: SelectionRulesService = Depends(get_rules_service),
) -> CompletableResponse:
    """Whether the selection is legal and can still be finished legally."""
    try:
        completable = service.is_completable(body.to_selection())
    except UnknownIdentifierError as exc:
        raise _unknown(exc) from exc
    return CompletableResponse(completable=completable)


@router.post("/unavailable", response_model=AvailabilityResponse)
async def derive_availability(
    body: SelectionRequest,
    service: SelectionRulesService = Depends(get_rules_service),
) -> AvailabilityResponse:
    """Split the remaining candidates into unavailable and available."""
    selection = body.to_selection()
    try:
        unavailable, available = service.availability(selection)
    except UnknownIdentifierError as exc:
        raise _unknown(exc) from exc

    logger.info(
        "Availability derived: %d unavailable, %d available",
        len(unavailable), len(available),
    )
    return AvailabilityResponse(
        unavailable=sorted(unavailable),
        available=sorted(available),
    )


@router.post("/completions", response_model=CompletionsResponse)
async def list_completions(
    body: SelectionRequest,
    service: SelectionRulesService = Depends(get_rules_service),
) -> CompletionsResponse:
    """Every legal completion of the selection, sorted."""
    try:
        completions = service.completions(body.to_selection())
    except UnknownIdentifierError as exc:
        raise _unknown(exc) from exc

    ordered = sorted(sorted(c) for c in completions)
    return CompletionsResponse(completions=ordered, count=len(ordered))
