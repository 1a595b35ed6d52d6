"""
AI-powered CI/CD pipeline generator.
Generates pipeline configuration from natural language descriptions.
Uses an OpenAI-compatible completion API, falls back to template-based generation.
"""

from typing import Optional, Union

import httpx

from src.config import config
from src.utils.logger import logger
from src.models.pipeline import (
    Language,
    Platform,
    PipelineRequest,
    PipelineResult,
)
from src.services.llm_client import CompletionClient


SYSTEM_PROMPT = "You are a DevOps expert. Generate ONLY valid YAML."

TEMPERATURE = 0.7
MAX_TOKENS = 4000

# Used when no credential is configured; requests then fail and fall back to templates
PLACEHOLDER_API_KEY = "dummy-key"

FILE_PATHS = {
    Platform.GITHUB_ACTIONS: ".github/workflows/ci-cd.yml",
    Platform.GITLAB_CI: ".gitlab-ci.yml",
    Platform.CIRCLECI: ".circleci/config.yml",
    Platform.JENKINS: "Jenkinsfile",
    Platform.AWS_CODEPIPELINE: "buildspec.yml",
}
DEFAULT_FILE_PATH = "pipeline.yml"

# GitHub Actions step fragments; any other language gets the placeholder values
_SETUP_ACTIONS = {
    Language.NODEJS: "node@v4",
    Language.PYTHON: "python@v5",
}
_INSTALL_COMMANDS = {
    Language.NODEJS: "npm ci",
    Language.PYTHON: "pip install -r requirements.txt",
}
_TEST_COMMANDS = {
    Language.NODEJS: "npm test",
    Language.PYTHON: "pytest",
}


def get_file_path(platform: Union[Platform, str]) -> str:
    """Suggested relative path for the generated file."""
    try:
        return FILE_PATHS.get(Platform(platform), DEFAULT_FILE_PATH)
    except ValueError:
        return DEFAULT_FILE_PATH


def build_prompt(request: PipelineRequest) -> str:
    platform = request.resolved_platform()
    language = request.resolved_language()

    prompt = f"Generate a CI/CD pipeline for {platform.value}.\n"
    prompt += f"Language: {language.value}\n"
    prompt += f"Description: {request.description}\n"

    if request.deployment_target:
        prompt += f"Deployment Target: {request.deployment_target.value}\n"

    prompt += "\nOutput ONLY valid YAML, no explanations."

    return prompt


def generate_template(language: Language, platform: Platform) -> str:
    """Template-based fallback. Only GitHub Actions gets a platform-specific shape."""
    language = Language(language)

    if Platform(platform) == Platform.GITHUB_ACTIONS:
        setup_action = _SETUP_ACTIONS.get(language, "unknown@v1")
        install_cmd = _INSTALL_COMMANDS.get(language, 'echo "Install"')
        test_cmd = _TEST_COMMANDS.get(language, 'echo "Test"')

        return f"""name: CI/CD Pipeline

on:
  push:
    branches: [ main, develop ]
  pull_request:
    branches: [ main ]

jobs:
  build:
    runs-on: ubuntu-latest
    steps:
    - uses: actions/checkout@v4
    - name: Setup {language.value}
      uses: actions/setup-{setup_action}
    - name: Install dependencies
      run: {install_cmd}
    - name: Run tests
      run: {test_cmd}"""

    return f'''stages:
  - build
  - test

build:
  stage: build
  script:
    - echo "Building {language.value}..."'''


class PipelineAI:
    """Pipeline generator bound to one completion client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: str = "gpt-4o",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = CompletionClient(
            api_key=api_key or PLACEHOLDER_API_KEY,
            base_url=base_url,
            model=model,
            timeout=timeout,
            transport=transport,
        )

    async def close(self):
        await self.client.close()

    async def generate(self, request: PipelineRequest) -> PipelineResult:
        """
        Generate a pipeline for the request.
        Any failure of the completion call is absorbed into the template fallback.
        """
        language = request.resolved_language()
        platform = request.resolved_platform()

        prompt = build_prompt(request)

        try:
            content = await self.client.complete(
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except Exception as e:
            logger.error(f"AI pipeline generation failed: {e}", exc_info=True)
            return self.generate_fallback(request)

        logger.info(
            f"AI generation success: platform={platform.value}, "
            f"language={language.value}, chars={len(content)}"
        )
        return PipelineResult(
            success=True,
            content=content,
            file_path=get_file_path(platform),
            platform=platform,
            language=language,
        )

    def generate_fallback(self, request: PipelineRequest) -> PipelineResult:
        language = request.resolved_language()
        platform = request.resolved_platform()

        return PipelineResult(
            success=True,
            content=generate_template(language, platform),
            file_path=get_file_path(platform),
            platform=platform,
            language=language,
        )


def create_pipeline_ai(api_key: Optional[str] = None) -> PipelineAI:
    """Build a generator from application config; the only place the env credential is read."""
    return PipelineAI(
        api_key=api_key or config.OPENAI_API_KEY,
        model=config.OPENAI_MODEL,
        base_url=config.OPENAI_BASE_URL,
        timeout=config.LLM_TIMEOUT,
    )


async def generate_pipeline(request: PipelineRequest, api_key: Optional[str] = None) -> PipelineResult:
    """Convenience form: one-off generator, generate, release the client."""
    pipeline_ai = create_pipeline_ai(api_key)
    try:
        return await pipeline_ai.generate(request)
    finally:
        await pipeline_ai.close()
