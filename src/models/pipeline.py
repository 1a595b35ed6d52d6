from pydantic import BaseModel
from typing import Optional
from enum import Enum


class Language(str, Enum):
    NODEJS = "nodejs"
    PYTHON = "python"
    GO = "go"
    RUBY = "ruby"
    JAVA = "java"
    RUST = "rust"
    PHP = "php"


class Platform(str, Enum):
    GITHUB_ACTIONS = "github-actions"
    GITLAB_CI = "gitlab-ci"
    CIRCLECI = "circleci"
    JENKINS = "jenkins"
    AWS_CODEPIPELINE = "aws-codepipeline"


class DeploymentTarget(str, Enum):
    AWS_ECS = "aws-ecs"
    AWS_LAMBDA = "aws-lambda"
    AWS_S3 = "aws-s3"
    VERCEL = "vercel"
    NETLIFY = "netlify"
    HEROKU = "heroku"
    GCP_CLOUD_RUN = "gcp-cloud-run"
    KUBERNETES = "kubernetes"
    DOCKER_HUB = "docker-hub"
    NPM = "npm"


DEFAULT_LANGUAGE = Language.NODEJS
DEFAULT_PLATFORM = Platform.GITHUB_ACTIONS


class PipelineRequest(BaseModel):
    description: str
    language: Optional[Language] = None
    platform: Optional[Platform] = None
    deployment_target: Optional[DeploymentTarget] = None
    # Accepted for forward compatibility; nothing reads it yet.
    features: list[str] = []

    def resolved_language(self) -> Language:
        return self.language or DEFAULT_LANGUAGE

    def resolved_platform(self) -> Platform:
        return self.platform or DEFAULT_PLATFORM


class PipelineResult(BaseModel):
    success: bool
    content: Optional[str] = None
    file_path: Optional[str] = None
    platform: Optional[Platform] = None
    language: Optional[Language] = None
    error: Optional[str] = None
