"""
Facade for the synthesis module.
Provides the public API that turns Go sources into an interface declaration.
"""

from typing import Callable, List, Optional

from ifacemaker.exceptions import SourceReadError, TypeNotFoundError
from ifacemaker.logging_config import logger
from ifacemaker.parser import extract_methods, scan_file
from ifacemaker.schemas import MakeOptions
from ifacemaker.sources import read_source
from .context import RunContext
from .emitter import Formatter, make_interface

Reader = Callable[[str], bytes]


def _interface_comment(iface_comment: str, type_doc: str) -> str:
    if not type_doc:
        return iface_comment
    if not iface_comment:
        return type_doc
    return f"{iface_comment}\n{type_doc}"


def make(options: MakeOptions, reader: Reader = read_source, formatter: Optional[Formatter] = None) -> str:
    """
    Generates the Go source of an interface for a struct.

    Files are read twice. The first pass collects every declared type and the
    embedding graph across all files, so the second pass can qualify types
    from other packages and find promoted methods wherever they are declared.

    Args:
        options: What to generate and from which files
        reader: Returns the contents of a file path
        formatter: Formats the assembled code (defaults to the built-in formatter)

    Returns:
        Formatted Go source code

    Raises:
        SourceReadError: If there are no files or one cannot be read
        ParserError: If a file is not valid Go
        TypeNotFoundError: If no file declares the struct
        FormatError: If the generated code does not format
    """
    if not options.files:
        raise SourceReadError("", "no input files")

    context = RunContext(options.exclude_methods)

    for path in options.files:
        declared_types, graph = scan_file(reader(path), path)
        context.add_declared_types(declared_types)
        context.add_graph(graph)

    if not context.declares(options.struct_type):
        raise TypeNotFoundError(options.struct_type)

    closure = context.graph.closure(options.struct_type)
    if options.with_promoted:
        logger.debug(f"{options.struct_type} embeds {closure}")

    for path in options.files:
        result = extract_methods(
            reader(path),
            options.struct_type,
            copy_docs=options.copy_docs,
            copy_type_doc=options.copy_type_doc,
            pkg_name=options.pkg_name,
            declared_types=context.declared_types,
            import_module=options.import_module,
            with_not_exported=options.with_not_exported,
            embedded_closure=closure,
            with_promoted=options.with_promoted,
            file_path=path,
        )
        context.add_extraction(result)

    logger.info(f"Synthesizing {options.iface_name} from {options.struct_type}: {context.summary()}")

    return make_interface(
        options.comment,
        options.pkg_name,
        options.iface_name,
        _interface_comment(options.iface_comment, context.type_doc),
        context.type_params,
        context.method_lines,
        context.imports,
        formatter=formatter,
    )


def generate_interface(
    files: List[str],
    struct_type: str,
    iface_name: str,
    pkg_name: str,
    reader: Reader = read_source,
    formatter: Optional[Formatter] = None,
    **kwargs,
) -> str:
    """
    Keyword-argument shortcut for make().

    Extra keyword arguments are MakeOptions fields (comment, copy_docs, ...).
    """
    options = MakeOptions(
        files=files,
        struct_type=struct_type,
        iface_name=iface_name,
        pkg_name=pkg_name,
        **kwargs,
    )
    return make(options, reader=reader, formatter=formatter)
