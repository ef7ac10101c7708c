from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload

from health_index.database import get_db
from health_index.models.biomarker import BiomarkerCategory, BiomarkerDefinition
from health_index.models.data_source import DataSource
from health_index.schemas.taxonomy import (
    BiomarkerDefinitionItem,
    CategoryDetail,
    CategoryListItem,
    DataSourceItem,
)
from health_index.services.resolver import load_aliases, resolve_biomarker

router = APIRouter(prefix="/api/taxonomy", tags=["taxonomy"])


def _biomarker_item(biomarker: BiomarkerDefinition) -> BiomarkerDefinitionItem:
    return BiomarkerDefinitionItem(
        id=biomarker.id,
        code=biomarker.code,
        display_name=biomarker.display_name,
        category=biomarker.category.name,
        unit=biomarker.unit,
        is_dependent=biomarker.is_dependent,
        normal_range_min=biomarker.normal_range_min,
        normal_range_max=biomarker.normal_range_max,
        aliases=load_aliases(biomarker.aliases),
        weight=biomarker.score_weight.weight if biomarker.score_weight else None,
    )


@router.get("/categories", response_model=list[CategoryListItem])
def list_categories(db: Session = Depends(get_db)):
    categories = (
        db.query(BiomarkerCategory)
        .options(selectinload(BiomarkerCategory.biomarkers))
        .order_by(BiomarkerCategory.id.asc())
        .all()
    )
    return [
        CategoryListItem(
            id=category.id,
            name=category.name,
            description=category.description,
            biomarker_codes=[b.code for b in category.biomarkers],
        )
        for category in categories
    ]


@router.get("/categories/{name}", response_model=CategoryDetail)
def get_category(name: str, db: Session = Depends(get_db)):
    category = db.query(BiomarkerCategory).filter(BiomarkerCategory.name == name).first()
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {name} not found")
    return CategoryDetail(
        id=category.id,
        name=category.name,
        description=category.description,
        biomarkers=[_biomarker_item(b) for b in category.biomarkers],
    )


@router.get("/biomarkers", response_model=list[BiomarkerDefinitionItem])
def list_biomarkers(category: str | None = Query(default=None), db: Session = Depends(get_db)):
    query = db.query(BiomarkerDefinition).join(BiomarkerCategory, BiomarkerDefinition.category_id == BiomarkerCategory.id)
    if category:
        query = query.filter(BiomarkerCategory.name == category)
    rows = query.order_by(BiomarkerCategory.id.asc(), BiomarkerDefinition.id.asc()).all()
    return [_biomarker_item(b) for b in rows]


@router.get("/biomarkers/resolve", response_model=BiomarkerDefinitionItem)
def resolve(label: str = Query(min_length=1), db: Session = Depends(get_db)):
    biomarker = resolve_biomarker(db, label)
    if not biomarker:
        raise HTTPException(status_code=404, detail=f"No biomarker matches {label}")
    return _biomarker_item(biomarker)


@router.get("/biomarkers/{code}", response_model=BiomarkerDefinitionItem)
def get_biomarker(code: str, db: Session = Depends(get_db)):
    biomarker = db.query(BiomarkerDefinition).filter(BiomarkerDefinition.code == code).first()
    if not biomarker:
        raise HTTPException(status_code=404, detail=f"Biomarker {code} not found")
    return _biomarker_item(biomarker)


@router.get("/data-sources", response_model=list[DataSourceItem])
def list_data_sources(db: Session = Depends(get_db)):
    rows = db.query(DataSource).order_by(DataSource.id.asc()).all()
    return [
        DataSourceItem(id=s.id, name=s.name, organization=s.organization, description=s.description)
        for s in rows
    ]
