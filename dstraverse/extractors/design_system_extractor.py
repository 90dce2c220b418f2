# dstraverse/extractors/design_system_extractor.py

import re
import json
import chardet
from tree_sitter_language_pack import get_parser
from dstraverse.base.component_extractor import ComponentExtractor
from dstraverse.catalog import ComponentCatalog, load_catalog
from dstraverse.extractors.node_kinds import NodeKind, GrammarProfile, get_profile

CALLEE_END = re.compile(r"[({]")


def read_source_bytes(file_path: str) -> bytes:
    with open(file_path, "rb") as f:
        raw = f.read()
    guess = chardet.detect(raw)
    encoding = guess["encoding"] or "utf-8"
    return raw.decode(encoding, errors="replace").encode("utf8")


def get_node_text(node, src: bytes) -> str:
    return src[node.start_byte:node.end_byte].decode("utf8", errors="replace")


def get_span(point) -> dict:
    return {"row": point[0], "column": point[1]}


def callee_name(usage_name: str) -> str:
    return CALLEE_END.split(usage_name, 1)[0].strip()


def matching_modules(text: str, imports) -> list:
    return [module for module in imports if module in text]


class DesignSystemExtractor(ComponentExtractor):
    def __init__(self, profile: GrammarProfile = None, catalog=None):
        self.profile = profile or get_profile("swift")
        if catalog is None:
            catalog = load_catalog()
        elif not isinstance(catalog, ComponentCatalog):
            catalog = ComponentCatalog(catalog)
        self.catalog = catalog
        self.parser = None
        self.all_components = []
        self.current_file_path = ""

    def get_parser(self):
        if self.parser is None:
            self.parser = get_parser(self.profile.grammar)
        return self.parser

    def process_file(self, file_path: str):
        self.current_file_path = file_path
        src = read_source_bytes(file_path)
        return self.process_source(src)

    def process_source(self, source):
        src = source.encode("utf8") if isinstance(source, str) else source
        tree = self.get_parser().parse(src)
        self.all_components = self.extract(tree.root_node, src)
        return self.all_components

    def write_to_file(self, output_path: str):
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.all_components, f, indent=4, ensure_ascii=False)

    def extract_all_components(self):
        return self.all_components

    def extract(self, root_node, src: bytes) -> list:
        """
        Walk the tree rooted at `root_node` and return one record per type or
        function declaration, in pre-order.

        The import set and the output list live only for this call, so the
        same extractor can be reused across files.
        """
        records = []
        imports = {}
        self.walk_node(root_node, src, records, imports)
        return records

    def walk_node(self, node, src, records, imports):
        kind = self.profile.classify(node)

        if kind is NodeKind.IMPORT:
            import_text = get_node_text(node, src)
            # an empty key would be a substring of everything
            if import_text:
                imports[import_text] = True
        elif kind is NodeKind.TYPE_DECLARATION:
            records.append(self.extract_type_declaration(node, src, imports))
        elif kind is NodeKind.FUNCTION_DECLARATION:
            records.append(self.extract_function_declaration(node, src, imports))

        for child in node.children:
            self.walk_node(child, src, records, imports)

    def iter_members(self, node):
        for child in node.named_children:
            if self.profile.is_kind(child, NodeKind.MEMBER_CONTAINER):
                yield from self.iter_members(child)
            else:
                yield child

    def find_child(self, node, kind: NodeKind):
        for child in node.named_children:
            if self.profile.is_kind(child, kind):
                return child
        return None

    def extract_type_declaration(self, node, src, imports):
        record = {
            "name": get_node_text(node, src),
            "inheritedTypeNames": [],
            "properties": [],
            "sourceSpanStart": get_span(node.start_point),
            "sourceSpanEnd": get_span(node.end_point),
            "importedFrom": [],
            "components": [],
        }
        for child in self.iter_members(node):
            kind = self.profile.classify(child)
            if kind is NodeKind.TYPE_IDENTIFIER:
                record["inheritedTypeNames"].append(get_node_text(child, src))
            elif kind is NodeKind.BINDING:
                prop = self.extract_property(child, src)
                if prop is not None:
                    record["properties"].append(prop)
                    record["importedFrom"].extend(matching_modules(prop["type"], imports))
            elif kind is NodeKind.CALL_EXPRESSION:
                record["components"].append(self.extract_component_usage(child, src, imports))
        return record

    def extract_function_declaration(self, node, src, imports):
        components = [
            self.extract_component_usage(child, src, imports)
            for child in self.iter_members(node)
            if self.profile.is_kind(child, NodeKind.CALL_EXPRESSION)
        ]
        return {
            "name": get_node_text(node, src),
            "sourceSpanStart": get_span(node.start_point),
            "sourceSpanEnd": get_span(node.end_point),
            "components": components,
        }

    def extract_property(self, node, src):
        # only annotated bindings count as properties
        ident = self.find_child(node, NodeKind.IDENTIFIER)
        annotation = self.find_child(node, NodeKind.TYPE_ANNOTATION)
        if ident is None or annotation is None:
            return None
        return {"name": get_node_text(ident, src), "type": get_node_text(annotation, src)}

    def extract_component_usage(self, node, src, imports):
        name = get_node_text(node, src)
        usage = {
            "name": name,
            "sourceSpanStart": get_span(node.start_point),
            "sourceSpanEnd": get_span(node.end_point),
            "importedFrom": matching_modules(name, imports),
        }
        entry = self.catalog.lookup(callee_name(name))
        if entry is not None:
            usage["version"] = entry["version"]
            usage["scope"] = entry["scope"]
            usage["dependencies"] = list(entry["dependencies"])
            usage["files"] = list(entry["files"])
        return usage
