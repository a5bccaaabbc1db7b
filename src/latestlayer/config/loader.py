"""
Service descriptor and compiled template loading.

Loads serverless.yml files, merges stage overrides and exposes the parts the
layer resolution reads and rewrites.
"""

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from latestlayer.config.resolver import resolve_config
from latestlayer.exceptions import ConfigurationError

DESCRIPTOR_NAMES = ("serverless.yml", "serverless.yaml")
DEFAULT_TEMPLATE_PATH = Path(".serverless") / "cloudformation-template-update-stack.json"
DEFAULT_REGION = "us-east-1"
PLUGIN_SETTINGS_KEY = "latestLayerVersion"


class Service:
    """Service descriptor with dict-like access.

    Layer lists returned through ``functions`` and ``compiled_template`` are
    the descriptor's own lists, so resolving them rewrites the descriptor.
    """

    def __init__(self, data: dict[str, Any], *, region: str | None = None, path: Path | None = None):
        self.data = data
        self.path = path
        self._region_override = region

    def get(self, key: str, default: Any = None) -> Any:
        """Get descriptor value using dot notation."""
        value: Any = self.data
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        if isinstance(key, str) and "." in key:
            return self.get(key)
        if key in self.data:
            return self.data[key]
        raise KeyError(f"Descriptor key '{key}' not found")

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    @property
    def name(self) -> str:
        service = self.data.get("service")
        if isinstance(service, dict):
            return service.get("name", "-")
        return service or "-"

    @property
    def provider(self) -> dict[str, Any]:
        provider = self.data.get("provider")
        if not isinstance(provider, dict):
            provider = self.data["provider"] = {}
        return provider

    @property
    def functions(self) -> dict[str, Any]:
        return self.data.get("functions") or {}

    @property
    def region(self) -> str:
        """
        Deployment region.

        Order: explicit override, provider.region, AWS_REGION,
        AWS_DEFAULT_REGION, us-east-1.
        """
        return (
            self._region_override
            or self.provider.get("region")
            or os.environ.get("AWS_REGION")
            or os.environ.get("AWS_DEFAULT_REGION")
            or DEFAULT_REGION
        )

    @property
    def compiled_template(self) -> dict[str, Any]:
        """Compiled CloudFormation template, created empty when absent."""
        template = self.provider.get("compiledCloudFormationTemplate")
        if not isinstance(template, dict):
            template = self.provider["compiledCloudFormationTemplate"] = {"Resources": {}}
        return template

    @compiled_template.setter
    def compiled_template(self, template: dict[str, Any]) -> None:
        self.provider["compiledCloudFormationTemplate"] = template

    @property
    def plugin_settings(self) -> dict[str, Any]:
        """Settings under custom.latestLayerVersion."""
        settings = self.get(f"custom.{PLUGIN_SETTINGS_KEY}", {})
        return settings if isinstance(settings, dict) else {}


def _read_yaml(path: Path) -> Any:
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        if hasattr(e, "problem_mark"):
            mark = e.problem_mark
            raise ConfigurationError(
                f"Error parsing {path.name} at line {mark.line + 1}, column {mark.column + 1}:\n"
                f"  {e}\n"
                f"  File: {path}\n"
                f"  Suggestion: Check YAML syntax, ensure proper indentation and quotes"
            ) from e
        raise ConfigurationError(f"Error parsing {path.name}: {e}\n  File: {path}") from e
    except PermissionError as e:
        raise ConfigurationError(
            f"Permission denied reading {path}\n  Error: {e}\n  Suggestion: Check file permissions"
        ) from e


def find_descriptor(project_path: Path) -> Path:
    """Locate serverless.yml (or .yaml) in a project directory."""
    for name in DESCRIPTOR_NAMES:
        candidate = project_path / name
        if candidate.is_file():
            return candidate
    raise ConfigurationError(
        f"Service descriptor not found in {project_path}\n"
        f"  Suggestion: Create a serverless.yml file in your project root",
        details={"project_path": str(project_path)},
    )


def load_service(
    project_path: Path | None = None,
    stage: str | None = None,
    region: str | None = None,
    substitute_env: bool = True,
) -> Service:
    """
    Load a service descriptor.

    Loads serverless.yml and merges serverless.{stage}.yml over it when
    present, then applies environment variable substitution.

    Args:
        project_path: Path to project root (default: current directory)
        stage: Deployment stage (dev, staging, prod)
        region: Region override
        substitute_env: Apply ${VAR} and {stage} substitution (off when the
            descriptor is going to be written back)

    Returns:
        Service instance with the merged descriptor
    """
    if project_path is None:
        project_path = Path.cwd()

    descriptor_path = find_descriptor(project_path)
    data = _read_yaml(descriptor_path) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Service descriptor must be a mapping, got {type(data).__name__}\n  File: {descriptor_path}"
        )

    if stage:
        stage_path = project_path / f"{descriptor_path.stem}.{stage}{descriptor_path.suffix}"
        if stage_path.is_file():
            stage_data = _read_yaml(stage_path) or {}
            if isinstance(stage_data, dict):
                _merge_dict(data, stage_data)

    if substitute_env:
        data = resolve_config(data, stage or "dev")
    return Service(data, region=region, path=descriptor_path)


def dump_service(service: Service, path: Path | None = None) -> Path:
    """Write the descriptor back as YAML, without the compiled template."""
    target = path or service.path
    if target is None:
        raise ConfigurationError("No path to write the service descriptor to")

    data = dict(service.data)
    if isinstance(data.get("provider"), dict):
        data["provider"] = {
            k: v for k, v in data["provider"].items() if k != "compiledCloudFormationTemplate"
        }
    with open(target, "w") as f:
        yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False)
    return target


def load_compiled_template(path: Path) -> dict[str, Any]:
    """Load a compiled CloudFormation template (JSON)."""
    try:
        with open(path) as f:
            template = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Compiled template not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Error parsing compiled template at line {e.lineno}, column {e.colno}: {e.msg}\n  File: {path}"
        ) from e

    if not isinstance(template, dict):
        raise ConfigurationError(f"Compiled template must be a JSON object\n  File: {path}")
    return template


def write_compiled_template(path: Path, template: dict[str, Any]) -> Path:
    """Write a compiled CloudFormation template (JSON)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(template, f, indent=2)
        f.write("\n")
    return path


def _merge_dict(base: dict, override: dict):
    """Recursively merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value
