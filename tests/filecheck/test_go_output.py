"""
FileCheck-style tests for generated Go files.

These tests validate the structure of complete generated files using
pattern matching similar to LLVM FileCheck.
"""

import re

from idlgen.codegen.generator import Generator
from idlgen.codegen.typespec import I64, STRING, ListSpec, StructSpec, TypedefSpec

TYPEDEF_TEMPLATE = """\
type {{ def_name(data) }} {{ type_reference(data.target, Required()) }}
"""

STRUCT_TEMPLATE = """\
type {{ def_name(data) }} struct {
{% for name, ftype, req in data.fields %}
\t{{ name | go_case }} {{ type_reference(ftype, required(req)) }}
{% endfor %}
}
"""

STRING_METHOD_TEMPLATE = """\
{% set fmt = import("fmt") %}
{% set strings = import("strings") %}
{% set type_name = def_name(data) %}

func (v *{{ type_name }}) String() string {
\tfields := make([]string, 0, {{ data.fields | length }})
{% for name, ftype, req in data.fields %}
\tfields = append(fields, {{ fmt }}.Sprintf("{{ name | go_case }}: %v", v.{{ name | go_case }}))
{% endfor %}
\treturn "{{ type_name }}{" + {{ strings }}.Join(fields, ", ") + "}"
}
"""

JSON_METHOD_TEMPLATE = """\
import "encoding/json"

func (v *{{ def_name(data) }}) MarshalJSON() ([]byte, error) {
\treturn json.Marshal(*v)
}
"""


def build_file():
    user_id = TypedefSpec("user_id", target=I64)
    user = StructSpec(
        "user",
        fields=(
            ("id", user_id, True),
            ("name", STRING, True),
            ("nicknames", ListSpec(STRING), False),
            ("email", STRING, False),
        ),
    )

    generator = Generator()
    generator.declare_from_template(TYPEDEF_TEMPLATE, user_id)
    generator.declare_from_template(STRUCT_TEMPLATE, user)
    generator.declare_from_template(STRING_METHOD_TEMPLATE, user)
    generator.declare_from_template(JSON_METHOD_TEMPLATE, user)
    return generator.render()


class TestGoFileStructure:
    """Test overall file structure using FileCheck-style validation."""

    def test_header_and_imports(self, go_check):
        go = build_file()

        # CHECK: package gen
        assert go.startswith("package gen\n\n")

        # CHECK: import (
        # CHECK-NEXT: "encoding/json"
        # CHECK-NEXT: "fmt"
        # CHECK-NEXT: "strings"
        # CHECK-NEXT: )
        go_check.contains(
            go,
            r'^import \(\n\t"encoding/json"\n\t"fmt"\n\t"strings"\n\)\n\n',
            "single sorted import block",
        )

        # CHECK-NOT: a second import declaration
        assert len(re.findall(r"^import", go, re.MULTILINE)) == 1

    def test_declarations_in_order(self):
        go = build_file()

        positions = [
            go.index("type UserId int64"),
            go.index("type User struct {"),
            go.index("func (v *User) String() string {"),
            go.index("func (v *User) MarshalJSON() ([]byte, error) {"),
        ]
        assert positions == sorted(positions)

    def test_struct_fields(self, go_check):
        go = build_file()

        # CHECK: type User struct {
        # CHECK-NEXT: Id UserId
        # CHECK-NEXT: Name string
        # CHECK-NEXT: Nicknames []string
        # CHECK-NEXT: Email *string
        # CHECK-NEXT: }
        go_check.contains(
            go,
            r"^type User struct \{\n\tId UserId\n\tName string\n\tNicknames \[\]string\n\tEmail \*string\n\}$",
            "struct fields with optional pointer",
        )

    def test_method_body(self, go_check):
        go = build_file()

        # CHECK: fields := make([]string, 0, 4)
        go_check.contains(go, r"^\tfields := make\(\[\]string, 0, 4\)$", "slice allocation")

        # CHECK: fields = append(fields, fmt.Sprintf("{{.*}}: %v", v.{{.*}}))
        assert len(re.findall(
            r'^\tfields = append\(fields, fmt\.Sprintf\("\w+: %v", v\.\w+\)\)$', go, re.MULTILINE
        )) == 4

        # CHECK: return "User{" + strings.Join(fields, ", ") + "}"
        go_check.contains(
            go, r'^\treturn "User\{" \+ strings\.Join\(fields, ", "\) \+ "\}"$', "string join"
        )

    def test_canonical_layout(self, go_check):
        go = build_file()

        go_check.not_contains(go, r"\n\n\n", "at most one blank line")
        go_check.not_contains(go, r"[ \t]+$", "no trailing whitespace")
        go_check.not_contains(go, r"^ +", "indentation uses tabs")
        assert go.endswith("}\n")

    def test_declarations_separated_by_blank_lines(self, go_check):
        go = build_file()

        # CHECK: type UserId int64
        # CHECK-EMPTY:
        # CHECK-NEXT: type User struct {
        go_check.contains(go, r"^type UserId int64\n\ntype User struct \{$", "blank line between decls")

        # CHECK: }
        # CHECK-EMPTY:
        # CHECK-NEXT: func (v *User) MarshalJSON
        go_check.contains(go, r"^\}\n\nfunc \(v \*User\) MarshalJSON", "blank line before method")

    def test_output_is_reproducible(self):
        assert build_file() == build_file()
