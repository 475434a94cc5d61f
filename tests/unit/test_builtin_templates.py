"""Unit tests for the shipped built-in templates and extends resolution."""

import pytest

from folio.contexts.templating import TemplateFileError, TemplateNotFoundError, normalize_template_with_report
from folio.contexts.templating.defaults import (
    DEFAULT_TEMPLATE_ID,
    get_default_template,
    load_builtin_documents,
    load_builtin_templates,
)


@pytest.mark.unit
def test_builtins_in_picker_order():
    assert list(load_builtin_templates()) == ["ats-default", "modern-default", "builtin-classic", "builtin-modern"]


@pytest.mark.unit
def test_every_builtin_is_system_owned_and_normalized():
    for template_id, template in load_builtin_templates().items():
        assert template.id == template_id
        assert template.is_built_in
        assert not normalize_template_with_report(template).changed, template_id


@pytest.mark.unit
def test_default_template():
    template = get_default_template()

    assert template.id == DEFAULT_TEMPLATE_ID
    assert template.name == "ATS Professional"
    assert template.section_order == ["summary", "skills", "experience", "education"]


@pytest.mark.unit
def test_extends_merges_over_base():
    modern = load_builtin_templates()["builtin-modern"]

    assert modern.name == "Modern"
    assert modern.typography.font_family == "Inter"
    assert modern.header.name_align == "left"
    assert modern.header.contact_rows[0].align == "left"
    # inherited from ats-default
    assert modern.experience.rows[0].align == "space-between"
    assert modern.page_numbers.format == "Page X"


@pytest.mark.unit
def test_extends_key_is_not_kept():
    for document in load_builtin_documents().values():
        assert "extends" not in document


@pytest.mark.unit
def test_builtins_cannot_claim_another_owner(tmp_path):
    (tmp_path / "base.yaml").write_text("id: base\nname: Base\n", encoding="utf-8")
    (tmp_path / "child.yaml").write_text("extends: base\nid: child\nname: Child\ncreatedBy: mallory\n", encoding="utf-8")

    templates = load_builtin_templates(tmp_path)

    assert templates["child"].created_by == "system"
    assert list(templates) == ["base", "child"]


@pytest.mark.unit
def test_unknown_base_is_an_error(tmp_path):
    (tmp_path / "orphan.yaml").write_text("extends: nowhere\nid: orphan\nname: Orphan\n", encoding="utf-8")

    with pytest.raises(TemplateNotFoundError):
        load_builtin_templates(tmp_path)


@pytest.mark.unit
def test_circular_extends_is_an_error(tmp_path):
    (tmp_path / "a.yaml").write_text("extends: b\nid: a\nname: A\n", encoding="utf-8")
    (tmp_path / "b.yaml").write_text("extends: a\nid: b\nname: B\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Circular extends"):
        load_builtin_templates(tmp_path)


@pytest.mark.unit
def test_missing_directory(tmp_path):
    with pytest.raises(TemplateFileError):
        load_builtin_templates(tmp_path / "missing")
