"""Shared fixtures: the sample résumé, user template files and the built-in default."""

from pathlib import Path

import pytest
from omegaconf import OmegaConf

from folio.contexts.templating import ResumeData, get_default_template

FIXTURES_PATH = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def resume_document() -> dict:
    return OmegaConf.to_container(OmegaConf.load(FIXTURES_PATH / "jane_doe.yaml"), resolve=True)


@pytest.fixture
def resume(resume_document) -> ResumeData:
    return ResumeData.from_dict(resume_document)


@pytest.fixture
def ats_template():
    return get_default_template()
