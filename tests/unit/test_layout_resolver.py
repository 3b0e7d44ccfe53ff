"""Tests for the layout resolver."""

import pytest


def _schema(text: str):
    from stylegen.core.layout_loader import parse_layout

    return parse_layout(text)


class TestResolveLayout:
    def test_struct_order(self, resolved_layout):
        names = [s.type_name for s in resolved_layout.structs]
        assert names == ["Tab", "Tabs", "Window", "GeneratedTheme"]
        assert resolved_layout.root.type_name == "GeneratedTheme"
        assert resolved_layout.root.is_root

    def test_dependencies_emitted_before_use(self, resolved_layout):
        from stylegen.core.ir import StructRef

        seen: set[str] = set()
        for struct in resolved_layout.structs:
            for field in struct.fields:
                if isinstance(field.type, StructRef):
                    assert field.type.type_name in seen
            seen.add(struct.type_name)

    def test_leaf_paths(self, resolved_layout):
        assert resolved_layout.leaf_paths() == [
            "tabs.regular.background",
            "tabs.regular.text",
            "tabs.selected.background",
            "tabs.selected.text",
            "tabs.divider",
            "window.background",
        ]
        assert resolved_layout.leaf_count() == 6

    def test_walk_leaves_keeps_member_names(self):
        from stylegen.core.layout_resolver import resolve_schema

        layout = resolve_schema(_schema("layout:\n  split_input:\n    fields: [textColor]\n"))
        assert layout.walk_leaves() == [("splitinput.textcolor", ["split_input", "textColor"])]

    def test_custom_root_name(self):
        from stylegen.core.layout_resolver import resolve_schema

        layout = resolve_schema(_schema("layout:\n  a:\n"), root_name="DarkTheme")
        assert [s.type_name for s in layout.structs] == ["DarkTheme"]

    def test_shared_definition_resolved_once(self):
        from stylegen.core.ir import StructRef
        from stylegen.core.layout_resolver import resolve_schema

        text = "definitions:\n  T:\n    fields: [a]\nlayout:\n  x: {ref: T}\n  y: {ref: T}\n"
        layout = resolve_schema(_schema(text))

        assert [s.type_name for s in layout.structs].count("T") == 1
        t = layout.get("T")
        assert t is not None and t.is_definition
        assert [f.type for f in layout.root.fields] == [
            StructRef(type_name="T"),
            StructRef(type_name="T"),
        ]
        assert layout.leaf_paths() == ["x.a", "y.a"]

    def test_definition_referencing_definition(self):
        from stylegen.core.layout_resolver import resolve_schema

        text = (
            "definitions:\n"
            "  Outer:\n"
            "    fields:\n"
            "      inner: {ref: Inner}\n"
            "  Inner:\n"
            "    fields: [a]\n"
            "layout:\n"
            "  o: {ref: Outer}\n"
        )
        layout = resolve_schema(_schema(text))
        assert [s.type_name for s in layout.structs] == ["Inner", "Outer", "GeneratedTheme"]
        assert layout.leaf_paths() == ["o.inner.a"]

    def test_unreferenced_definition_still_emitted(self):
        from stylegen.core.layout_resolver import resolve_schema

        text = "definitions:\n  Unused:\n    fields: [a]\nlayout:\n  x:\n"
        layout = resolve_schema(_schema(text))
        assert layout.get("Unused") is not None
        assert layout.leaf_paths() == ["x"]

    def test_nested_struct_names(self):
        from stylegen.core.layout_resolver import resolve_schema

        text = (
            "definitions:\n"
            "  Tab:\n"
            "    fields:\n"
            "      line:\n"
            "        fields: [hover]\n"
            "layout:\n"
            "  tab: {ref: Tab}\n"
            "  scroll_bar:\n"
            "    fields:\n"
            "      thumb:\n"
            "        fields: [hover]\n"
        )
        layout = resolve_schema(_schema(text))
        assert [s.type_name for s in layout.structs] == [
            "TabLine",
            "Tab",
            "ScrollBarThumb",
            "ScrollBar",
            "GeneratedTheme",
        ]

    def test_nested_name_collision_gets_suffix(self):
        from stylegen.core.layout_resolver import resolve_schema

        text = "definitions:\n  Tabs:\n    fields: [a]\nlayout:\n  t: {ref: Tabs}\n  tabs:\n    fields: [b]\n"
        layout = resolve_schema(_schema(text))
        assert [s.type_name for s in layout.structs] == ["Tabs", "Tabs2", "GeneratedTheme"]


class TestResolveErrors:
    def test_undefined_reference(self):
        from stylegen.core.errors import UndefinedReference
        from stylegen.core.layout_resolver import resolve_schema

        with pytest.raises(UndefinedReference) as exc_info:
            resolve_schema(_schema("layout:\n  x: {ref: Missing}\n"))
        assert exc_info.value.name == "Missing"

    def test_self_reference(self):
        from stylegen.core.errors import CyclicReference
        from stylegen.core.layout_resolver import resolve_schema

        text = "definitions:\n  A:\n    fields:\n      me: {ref: A}\nlayout:\n  x: {ref: A}\n"
        with pytest.raises(CyclicReference) as exc_info:
            resolve_schema(_schema(text))
        assert exc_info.value.path == ["A", "A"]

    def test_longer_cycle(self):
        from stylegen.core.errors import CyclicReference
        from stylegen.core.layout_resolver import resolve_schema

        text = (
            "definitions:\n"
            "  A:\n"
            "    fields:\n"
            "      b: {ref: B}\n"
            "  B:\n"
            "    fields:\n"
            "      wrapper:\n"
            "        fields:\n"
            "          c: {ref: C}\n"
            "  C:\n"
            "    fields:\n"
            "      a: {ref: A}\n"
            "layout:\n"
            "  x: {ref: A}\n"
        )
        with pytest.raises(CyclicReference) as exc_info:
            resolve_schema(_schema(text))
        assert exc_info.value.path == ["A", "B", "C", "A"]
        assert "A -> B -> C -> A" in str(exc_info.value)

    def test_cycle_in_unreferenced_definitions(self):
        from stylegen.core.errors import CyclicReference
        from stylegen.core.layout_resolver import resolve_schema

        text = "definitions:\n  A:\n    fields:\n      a: {ref: A}\nlayout:\n  x:\n"
        with pytest.raises(CyclicReference):
            resolve_schema(_schema(text))

    def test_duplicate_definition_objects(self):
        from stylegen.core.errors import DuplicateDefinitionName
        from stylegen.core.ir import Definition, FieldSpec
        from stylegen.core.layout_resolver import resolve_layout

        definitions = [
            Definition(name="T", fields=[FieldSpec.leaf("a")]),
            Definition(name="T", fields=[FieldSpec.leaf("b")]),
        ]
        with pytest.raises(DuplicateDefinitionName):
            resolve_layout(definitions, [FieldSpec.reference("x", "T")])

    def test_fields_colliding_after_normalization(self):
        from stylegen.core.errors import LayoutSchemaError
        from stylegen.core.layout_resolver import resolve_schema

        with pytest.raises(LayoutSchemaError, match="same key 'textcolor'"):
            resolve_schema(_schema("layout:\n  text_color:\n  textColor:\n"))

    def test_definition_named_like_root(self):
        from stylegen.core.errors import LayoutSchemaError
        from stylegen.core.layout_resolver import resolve_schema

        text = "definitions:\n  GeneratedTheme:\n    fields: [a]\nlayout:\n  x:\n"
        with pytest.raises(LayoutSchemaError, match="clashes with the root"):
            resolve_schema(_schema(text))

    def test_field_name_without_letters(self):
        from stylegen.core.errors import LayoutSchemaError
        from stylegen.core.layout_resolver import resolve_schema

        with pytest.raises(LayoutSchemaError, match="Field name '_' of 'layout' has no letters"):
            resolve_schema(_schema("layout:\n  _:\n    fields: [a]\n  a:\n"))

    def test_leaf_name_without_letters(self):
        from stylegen.core.errors import LayoutSchemaError
        from stylegen.core.layout_resolver import resolve_schema

        with pytest.raises(LayoutSchemaError, match="Field name '--' of 'Tabs'"):
            resolve_schema(_schema("layout:\n  tabs:\n    fields: ['--']\n"))
