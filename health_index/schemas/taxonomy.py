from pydantic import BaseModel


class BiomarkerDefinitionItem(BaseModel):
    id: int
    code: str
    display_name: str
    category: str
    unit: str
    is_dependent: bool
    normal_range_min: float
    normal_range_max: float
    aliases: list[str]
    weight: float | None


class CategoryListItem(BaseModel):
    id: int
    name: str
    description: str | None
    biomarker_codes: list[str]


class CategoryDetail(BaseModel):
    id: int
    name: str
    description: str | None
    biomarkers: list[BiomarkerDefinitionItem]


class DataSourceItem(BaseModel):
    id: int
    name: str
    organization: str | None
    description: str | None


class WeightItem(BaseModel):
    code: str
    category: str
    weight: float


class WeightSummary(BaseModel):
    weights: list[WeightItem]
    total: float
    balanced: bool


class WeightLookup(BaseModel):
    code: str
    weight: float
