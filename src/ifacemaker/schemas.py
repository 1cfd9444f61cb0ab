from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class DeclaredType(BaseModel):
    """
    Identifies the name and package of a type declaration.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    package: str

    @property
    def fullname(self) -> str:
        """Scoped Package.Name string for this declaration."""
        return f"{self.package}.{self.name}"


class Method(BaseModel):
    """
    Describes the code and documentation tied into a method.
    """
    name: str
    code: str
    docs: List[str] = Field(default_factory=list)
    promoted: bool = False

    def lines(self) -> List[str]:
        """Documentation lines followed by the code line."""
        return [*self.docs, self.code]


class ExtractionResult(BaseModel):
    """
    Everything the method extractor learned from a single file.
    """
    methods: List[Method] = Field(default_factory=list)
    imports: List[str] = Field(default_factory=list)
    type_doc: str = ""
    type_params: str = ""


class MakeOptions(BaseModel):
    """
    Options for a single interface synthesis run.
    """
    files: List[str]
    struct_type: str
    iface_name: str
    pkg_name: str
    comment: str = ""
    iface_comment: str = ""
    import_module: str = ""
    copy_docs: bool = False
    copy_type_doc: bool = False
    with_promoted: bool = False
    with_not_exported: bool = False
    exclude_methods: List[str] = Field(default_factory=list)


class FormatOptions(BaseModel):
    """
    Options bundle handed to the code formatter.
    """
    tab_indent: bool = True
    tab_width: int = 2
    fragment: bool = True
    comments: bool = True
    format_only: bool = False
    local_prefix: Optional[str] = None
