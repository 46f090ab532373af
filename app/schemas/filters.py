from pydantic import BaseModel


class DeveloperOption(BaseModel):
    id: int
    nome: str


class ProjectOption(BaseModel):
    id: int
    nome: str
    incorporadora_id: int


class ConsultingFiltersResponse(BaseModel):
    incorporadoras: list[DeveloperOption]
    empreendimentos: list[ProjectOption]


class DeveloperFiltersResponse(BaseModel):
    empreendimentos: list[ProjectOption]
