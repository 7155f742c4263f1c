from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class DatabaseRules(BaseModel):
    name: str = "devflow"
    url_env: str = "DEVFLOW_DATABASE_URL"

class PaginationRules(BaseModel):
    page_size: int = Field(default=10, ge=1)

class IdentityRules(BaseModel):
    algorithm: str = "HS256"

class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)

class Rules(BaseModel):
    project: ProjectRules
    database: DatabaseRules = Field(default_factory=DatabaseRules)
    pagination: PaginationRules = Field(default_factory=PaginationRules)
    identity: IdentityRules = Field(default_factory=IdentityRules)
    ops: OpsRules = Field(default_factory=OpsRules)
