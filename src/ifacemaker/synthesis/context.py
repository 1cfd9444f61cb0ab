from typing import Dict, List, Optional, Set

from ifacemaker.graph import EmbeddingGraph
from ifacemaker.schemas import DeclaredType, ExtractionResult, Method


class RunContext:
    """
    Accumulated state of a single synthesis run.

    Every merge is first-wins: the first declaration of a type, the first
    method of a given name and the first copy of an import are kept, in the
    order the files were given. Methods declared on the struct itself are
    merged ahead of promoted ones from any file, so a promoted method never
    takes the name of a direct one.
    """

    def __init__(self, excluded_methods: Optional[List[str]] = None):
        self.declared_types: List[DeclaredType] = []
        self.graph = EmbeddingGraph()
        self.excluded_methods: Set[str] = set(excluded_methods or [])

        self.imports: List[str] = []
        self.type_doc = ""
        self.type_params = ""

        self._type_names: Set[str] = set()
        self._direct: List[Method] = []
        self._promoted: List[Method] = []
        self._import_set: Set[str] = set()

    def add_declared_types(self, declared_types: List[DeclaredType]) -> None:
        for declared in declared_types:
            if declared.fullname in self._type_names:
                continue
            self._type_names.add(declared.fullname)
            self.declared_types.append(declared)

    def add_graph(self, graph: EmbeddingGraph) -> None:
        self.graph.merge(graph)

    def declares(self, type_name: str) -> bool:
        """True if any input file declares a type with this exact name."""
        return any(declared.name == type_name for declared in self.declared_types)

    def add_extraction(self, result: ExtractionResult) -> None:
        """Merges one file's methods, imports, type doc and type parameters."""
        for method in result.methods:
            if method.name in self.excluded_methods:
                continue
            if method.promoted:
                self._promoted.append(method)
            else:
                self._direct.append(method)

        for imp in result.imports:
            if imp not in self._import_set:
                self._import_set.add(imp)
                self.imports.append(imp)

        if not self.type_doc:
            self.type_doc = result.type_doc
        if not self.type_params:
            self.type_params = result.type_params

    @property
    def methods(self) -> List[Method]:
        """Direct methods, then promoted ones, each name once."""
        seen: Set[str] = set()
        methods = []
        for method in self._direct + self._promoted:
            if method.name not in seen:
                seen.add(method.name)
                methods.append(method)
        return methods

    @property
    def method_lines(self) -> List[str]:
        return [line for method in self.methods for line in method.lines()]

    def summary(self) -> Dict[str, int]:
        return {
            "declared_types": len(self.declared_types),
            "methods": len(self.methods),
            "imports": len(self.imports),
        }
