import pytest
from pydantic import ValidationError

from src.models.pipeline import DeploymentTarget, Language, Platform, PipelineRequest
from src.services.pipeline_service import build_prompt


def test_prompt_uses_defaults():
    prompt = build_prompt(PipelineRequest(description="Build and test my API"))

    assert prompt == (
        "Generate a CI/CD pipeline for github-actions.\n"
        "Language: nodejs\n"
        "Description: Build and test my API\n"
        "\n"
        "Output ONLY valid YAML, no explanations."
    )


def test_prompt_includes_deployment_target():
    request = PipelineRequest(
        description="Deploy a Flask app",
        language=Language.PYTHON,
        platform=Platform.GITLAB_CI,
        deployment_target=DeploymentTarget.GCP_CLOUD_RUN,
    )

    assert build_prompt(request) == (
        "Generate a CI/CD pipeline for gitlab-ci.\n"
        "Language: python\n"
        "Description: Deploy a Flask app\n"
        "Deployment Target: gcp-cloud-run\n"
        "\n"
        "Output ONLY valid YAML, no explanations."
    )


def test_prompt_ignores_features():
    base = PipelineRequest(description="Go service", language="go")
    with_features = PipelineRequest(description="Go service", language="go", features=["docker", "lint"])

    assert build_prompt(base) == build_prompt(with_features)


def test_request_resolves_defaults():
    request = PipelineRequest(description="anything")

    assert request.resolved_language() == Language.NODEJS
    assert request.resolved_platform() == Platform.GITHUB_ACTIONS
    assert request.features == []


def test_request_rejects_unknown_platform():
    with pytest.raises(ValidationError):
        PipelineRequest(description="anything", platform="travis-ci")


def test_prompt_accepts_empty_description():
    prompt = build_prompt(PipelineRequest(description=""))

    assert "Description: \n" in prompt
