"""Tests for the YAML interchange codec."""
import pytest
import yaml

from workshop.modules.common import NameLookup
from workshop.modules.prompts.exceptions import MalformedInterchangeError
from workshop.modules.prompts.interchange import export_to_interchange, import_from_interchange
from workshop.modules.prompts.models import PromptTemplate, PromptVariable


@pytest.fixture
def categories():
    return NameLookup([("cat-web", "Web Development"), ("cat-content", "Content Creation")])


@pytest.fixture
def tags():
    return NameLookup([("tag-zero", "Zero-Shot"), ("tag-cot", "Chain of Thought")])


@pytest.fixture
def template():
    return PromptTemplate(
        id="prompt-1",
        name="Code Review Assistant",
        description="Reviews code and provides feedback",
        content="Please review the following {{language}} code:\n\n{{code}}\n",
        variables=[
            PromptVariable(name="language", description="Programming language", required=True),
            PromptVariable(name="code", description="Code to review", required=True, default_value="pass"),
        ],
        category_id="cat-web",
        tag_ids=["tag-zero", "tag-cot"],
    )


class TestExport:
    """Test exporting templates."""

    def test_block_style_with_resolved_names(self, template, categories, tags):
        """Test that the document is block style and uses display names."""
        text = export_to_interchange(template, categories, tags)
        document = yaml.safe_load(text)

        assert "{" not in text.splitlines()[0]
        assert document["name"] == "Code Review Assistant"
        assert document["category"] == "Web Development"
        assert document["tags"] == ["Zero-Shot", "Chain of Thought"]
        assert document["variables"][1] == {
            "name": "code",
            "description": "Code to review",
            "type": "string",
            "required": True,
            "defaultValue": "pass",
        }

    def test_field_order(self, template, categories, tags):
        """Test that top-level keys keep a stable order."""
        document = yaml.safe_load(export_to_interchange(template, categories, tags))
        assert list(document) == ["name", "description", "content", "variables", "category", "tags"]

    def test_multiline_content_uses_literal_block(self, template, categories, tags):
        """Test that multi-line content is written as a literal block."""
        text = export_to_interchange(template, categories, tags)
        assert "content: |" in text

    def test_dangling_category_is_omitted(self, template, tags):
        """Test that an unresolvable category id drops the field instead of failing."""
        text = export_to_interchange(template, NameLookup(), tags)
        assert "category" not in yaml.safe_load(text)

    def test_dangling_tags_are_dropped(self, template, categories):
        """Test that unresolvable tag ids are skipped."""
        template.tag_ids = ["tag-zero", "tag-gone"]
        document = yaml.safe_load(export_to_interchange(template, categories, NameLookup([("tag-zero", "Zero-Shot")])))
        assert document["tags"] == ["Zero-Shot"]


class TestImport:
    """Test importing templates."""

    def test_round_trip(self, template, categories, tags):
        """Test that export followed by import reproduces the template."""
        imported = import_from_interchange(export_to_interchange(template, categories, tags), categories, tags)

        assert imported.name == template.name
        assert imported.content == template.content
        assert imported.description == template.description
        assert imported.variables == template.variables
        assert imported.category_id == "cat-web"
        assert imported.tag_ids == ["tag-zero", "tag-cot"]

    def test_names_resolve_case_insensitively(self, categories, tags):
        """Test that category and tag names match regardless of case."""
        text = "name: T\ncontent: x\ncategory: web development\ntags:\n  - zero-shot\n"
        imported = import_from_interchange(text, categories, tags)
        assert imported.category_id == "cat-web"
        assert imported.tag_ids == ["tag-zero"]

    def test_unknown_names_are_dropped(self, categories, tags):
        """Test that unknown category or tag names do not fail the import."""
        text = "name: T\ncontent: x\ncategory: Nope\ntags: [Zero-Shot, Missing, Zero-Shot]\n"
        imported = import_from_interchange(text, categories, tags)
        assert imported.category_id is None
        assert imported.tag_ids == ["tag-zero"]

    def test_scalar_defaults_become_text(self, categories, tags):
        """Test that numeric and boolean defaults are kept as text."""
        text = (
            "name: T\ncontent: '{{n}} {{b}}'\nvariables:\n"
            "  - name: n\n    type: number\n    defaultValue: 800\n"
            "  - name: b\n    type: boolean\n    defaultValue: true\n"
        )
        imported = import_from_interchange(text, categories, tags)
        assert [variable.default_value for variable in imported.variables] == ["800", "true"]

    @pytest.mark.parametrize(
        "text",
        [
            "name: [unclosed",
            "- just\n- a list\n",
            "content: only content\n",
            "name: T\n",
            "name: T\ncontent: x\nvariables: nope\n",
            "name: T\ncontent: x\nvariables:\n  - description: no name\n",
            "name: T\ncontent: x\nvariables:\n  - name: a\n  - name: a\n",
            "name: T\ncontent: x\nvariables:\n  - name: a\n    type: date\n",
            "name: T\ncontent: x\nvariables:\n  - name: a\n    required: maybe\n",
            "name: T\ncontent: x\ntags: Zero-Shot\n",
            "name: T\ncontent: x\ncategory: [a, b]\n",
        ],
    )
    def test_malformed_documents_are_rejected(self, text, categories, tags):
        """Test that structural problems raise instead of importing partially."""
        with pytest.raises(MalformedInterchangeError):
            import_from_interchange(text, categories, tags)

    def test_non_text_name_is_reported_as_wrong_type(self, categories, tags):
        """Test that a present but non-string name is not reported as missing."""
        with pytest.raises(MalformedInterchangeError, match="must be a non-empty string"):
            import_from_interchange("name: 123\ncontent: x\n", categories, tags)

    def test_absent_content_is_reported_as_required(self, categories, tags):
        """Test that a missing content key is reported as required."""
        with pytest.raises(MalformedInterchangeError, match="'content' is required"):
            import_from_interchange("name: T\n", categories, tags)
