"""Data models of the generated documentation artifact.

These Pydantic models are the output of the engine. Serialize them with
``model_dump_json(by_alias=True)`` to get the document consumed by
downstream documentation tooling.
"""

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Project-level settings supplied to a run.

    Attributes
    ----------
    project_description : str
        Free-text description of the documented project
    project_url : str
        Project home page
    founded : int
        Founding date, epoch milliseconds
    maintainers : list[str]
        Maintainer names, in order
    record_time : bool
        Stamp each model with the run's capture time; never serialized
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_description: str = Field(default="", serialization_alias="projectDescription")
    project_url: str = Field(default="", serialization_alias="projectUrl")
    founded: int = 0
    maintainers: tuple[str, ...] = ()
    record_time: bool = Field(default=True, exclude=True)


class ParameterDoc(BaseModel):
    """Documentation for a single model parameter.

    Attributes
    ----------
    type : str
        Simplified type description (e.g., "list of string") or a model key
    name : str
        Parameter name
    behavior : str
        What the parameter does
    """

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    behavior: str = ""


class ModelDoc(BaseModel):
    """Documentation for one model.

    Attributes
    ----------
    type : str
        The model key
    name : str
        Display name
    group : str
        Group the model is listed under
    description : str
        What the model does
    parameters : tuple[ParameterDoc, ...]
        Documented parameters, in order
    last_updated : int
        Capture time of the run in epoch milliseconds, or 0
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str
    name: str
    group: str = ""
    description: str = ""
    parameters: tuple[ParameterDoc, ...] = ()
    last_updated: int = Field(default=0, serialization_alias="lastUpdated")


class DocumentSet(BaseModel):
    """The complete artifact: every documented model plus the run settings."""

    model_config = ConfigDict(frozen=True)

    elements: tuple[ModelDoc, ...] = ()
    settings: Settings = Field(default_factory=Settings)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    def keys(self) -> list[str]:
        return [element.type for element in self.elements]
