from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from taxonomy.api.v1.schemas.vocabulary import (
    TermCreateRequest,
    TermOption,
    TermRead,
    VocabularyCreate,
    VocabularyRead,
)
from taxonomy.core.models.term import TermCreate
from taxonomy.core.services.taxonomy_service import TaxonomyService  # noqa: TCH001
from taxonomy.dependencies import get_taxonomy_service

router = APIRouter()


def _vocabulary_ref(ref: str) -> int | str:
    """Numeric path segments address a vocabulary by id, anything else by name."""
    return int(ref) if ref.isascii() and ref.isdigit() else ref


@router.get("/", response_model=list[VocabularyRead])
def list_vocabularies(service: TaxonomyService = Depends(get_taxonomy_service)):
    return [VocabularyRead.model_validate(v) for v in service.list_vocabularies()]


@router.post("/", response_model=VocabularyRead, status_code=status.HTTP_201_CREATED)
def create_vocabulary(
    payload: VocabularyCreate,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    vocabulary = service.create_vocabulary(payload.name)
    return VocabularyRead.model_validate(vocabulary)


@router.get("/{ref}", response_model=VocabularyRead)
def get_vocabulary(ref: str, service: TaxonomyService = Depends(get_taxonomy_service)):
    vocabulary = service.get_vocabulary(_vocabulary_ref(ref))
    if not vocabulary:
        raise HTTPException(status_code=404, detail="Vocabulary not found")
    return VocabularyRead.model_validate(vocabulary)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vocabulary(name: str, service: TaxonomyService = Depends(get_taxonomy_service)):
    """Delete a vocabulary and its terms. Only names are accepted here."""
    deleted = service.delete_vocabulary(name)
    if not deleted:
        raise HTTPException(status_code=404, detail="Vocabulary not found")
    return None


@router.get("/{ref}/terms", response_model=list[TermRead])
def list_terms(
    ref: str,
    parent: str | None = None,
    include_parent: bool = False,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    """List every term of a vocabulary, or the direct children of `parent`."""
    parent_name: str | bool = parent if parent is not None else True
    terms = service.get_terms(_vocabulary_ref(ref), parent_name, include_parent=include_parent)
    return [TermRead.model_validate(t) for t in terms]


@router.post("/{ref}/terms", response_model=TermRead, status_code=status.HTTP_201_CREATED)
def create_term(
    ref: str,
    payload: TermCreateRequest,
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    term = service.create_term(_vocabulary_ref(ref), TermCreate.model_validate(payload.model_dump()))
    return TermRead.model_validate(term)


@router.get("/{ref}/terms/{name}", response_model=TermRead)
def get_term(ref: str, name: str, service: TaxonomyService = Depends(get_taxonomy_service)):
    term = service.get_term(_vocabulary_ref(ref), name)
    if not term:
        raise HTTPException(status_code=404, detail="Term not found")
    return TermRead.model_validate(term)


@router.get("/{ref}/terms/{name}/root", response_model=TermRead)
def get_root_term(ref: str, name: str, service: TaxonomyService = Depends(get_taxonomy_service)):
    term = service.get_term(_vocabulary_ref(ref), name)
    if not term:
        raise HTTPException(status_code=404, detail="Term not found")
    return TermRead.model_validate(service.get_root_term(term))


@router.get("/{ref}/term-names", response_model=dict[int, Any])
def get_term_names(
    ref: str,
    field: str = "name",
    service: TaxonomyService = Depends(get_taxonomy_service),
):
    """Return `{term_id: value}` for every term, where value is `field` (the name by default)."""
    try:
        return service.get_terms_by_name_as_dict(_vocabulary_ref(ref), field=field)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(err)) from err


@router.get("/{name}/options", response_model=list[TermOption])
def get_vocabulary_options(name: str, service: TaxonomyService = Depends(get_taxonomy_service)):
    """Return the indented option list of a vocabulary; list order is display order."""
    options = service.get_vocabulary_options(name)
    return [TermOption(id=term_id, label=label) for term_id, label in options.items()]
