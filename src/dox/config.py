"""Configuration management for dox."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import CONFIG_FILE, DOCFX_TIMEOUT, LOCAL_PORT, PROBE_TIMEOUT
from .models import Host


class ConfigError(Exception):
    """Configuration is missing, invalid, or cannot be resolved."""


class ProjectConfig(BaseModel):
    """Project-level configuration."""

    name: str = "unnamed-project"


class DocFxConfig(BaseModel):
    """Configuration for the external documentation builder."""

    exec: str = "docfx"
    folder: str = ".docfx"  # Relative to the input directory
    config_file: str = "docfx.json"
    site_folder: str = "_site"
    timeout: int = DOCFX_TIMEOUT


class SiteConfig(BaseModel):
    """Domains and rewrite rules for the three deployment hosts."""

    local_domain: str = f"localhost:{LOCAL_PORT}"
    dev_domain: str = "gdx-dev.dotbunny.com"
    main_domain: str = "gdx.dotbunny.com"
    source_url: str = Field(
        default="https://github.com/dotBunny/GDX",
        description="Repository whose /blob/<branch>/ source links are rewritten",
    )
    rewrite_extensions: list[str] = Field(
        default=[".html", ".htm", ".xml", ".json", ".yml"],
        description="File suffixes the link rewriter touches",
    )
    excluded_files: list[str] = Field(
        default=["automation.html"], description="File names never rewritten"
    )

    def base_url(self, host: Host) -> str:
        """Get the URL root-relative links resolve against for a host."""
        if host == Host.DEV:
            return f"https://{self.dev_domain}/"
        if host == Host.MAIN:
            return f"https://{self.main_domain}/"
        return f"http://{self.local_domain}/"

    def substitutions(self, host: Host) -> list[tuple[str, str]]:
        """Get the ordered literal replacements that retarget content to a host.

        No replacement's output is another replacement's input within one
        host, so applying the list twice is the same as applying it once.
        """
        local = f"/{self.local_domain}"
        dev = f"/{self.dev_domain}"
        main = f"/{self.main_domain}"
        blob_dev = f"{self.source_url.rstrip('/')}/blob/dev/"
        blob_main = f"{self.source_url.rstrip('/')}/blob/main/"

        if host == Host.LOCAL:
            return [
                (dev, local),
                (main, local),
                # Local hosting has no TLS
                (f"https://{self.local_domain}", f"http://{self.local_domain}"),
                (blob_main, blob_dev),
            ]
        if host == Host.MAIN:
            return [
                (dev, main),
                (local, main),
                (blob_dev, blob_main),
            ]
        return [
            (main, dev),
            (local, dev),
            (blob_main, blob_dev),
        ]


class LinksConfig(BaseModel):
    """Configuration for link validation."""

    validate_links: bool = Field(default=False, alias="validate")
    probe_timeout: int = PROBE_TIMEOUT
    ping_url: str = "https://github.com"

    model_config = ConfigDict(populate_by_name=True)


class DeployConfig(BaseModel):
    """Configuration for publishing to the static site repository."""

    repository: str = "https://github.com/dotBunny/GDX.Documentation.git"
    branches: dict[str, Host] = Field(
        default_factory=lambda: {"main": Host.MAIN, "dev": Host.DEV},
        description="Site repository branch to the host its links target",
    )
    depth: int | None = 1
    staging_folder: str = ".dox-deploy"  # Relative to the input directory
    commit_message: str = "Documentation update {date}"

    def host_for_branch(self, branch: str) -> Host:
        """Resolve the deployment host for a site branch.

        Raises:
            ConfigError: If the branch is not mapped to a host
        """
        try:
            return self.branches[branch]
        except KeyError:
            known = ", ".join(sorted(self.branches)) or "none"
            raise ConfigError(f"Unknown deployment branch '{branch}' (known: {known})") from None


class CIConfig(BaseModel):
    """Configuration for CI agent detection and artifacts."""

    env_var: str = "TEAMCITY_VERSION"
    staging_folder: str = "Staging"  # Relative to the input directory
    inspection_file: str = "ResharperInspection.xml"
    duplicates_file: str = "ResharperDuplicates.xml"
    coverage_folder: str = "CodeCoverage"


class StepsConfig(BaseModel):
    """Default step selection."""

    default: list[str] = Field(
        default=[
            "files-changelog",
            "files-license",
            "metadata",
            "code-inspection",
            "code-duplication",
            "code-coverage",
            "build",
            "links",
            "host",
        ]
    )


class DoxConfig(BaseModel):
    """Root configuration for dox."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    docfx: DocFxConfig = Field(default_factory=DocFxConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    links: LinksConfig = Field(default_factory=LinksConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    ci: CIConfig = Field(default_factory=CIConfig)
    steps: StepsConfig = Field(default_factory=StepsConfig)


def load_config(input_dir: Path) -> DoxConfig:
    """Load config from dox.toml.

    Args:
        input_dir: Documentation input directory

    Returns:
        Loaded configuration, or defaults if dox.toml doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or fails validation
    """
    config_path = input_dir / CONFIG_FILE
    if not config_path.exists():
        return DoxConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return DoxConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid {config_path}: {e}") from e


def write_config_template(input_dir: Path) -> Path:
    """Write default dox.toml template.

    Args:
        input_dir: Documentation input directory

    Returns:
        Path to the written config file
    """
    config_path = input_dir / CONFIG_FILE
    defaults = DoxConfig()
    template = {
        "project": {"name": input_dir.resolve().name},
        "docfx": {"exec": "docfx", "folder": ".docfx"},
        "site": {
            "dev_domain": defaults.site.dev_domain,
            "main_domain": defaults.site.main_domain,
            "source_url": defaults.site.source_url,
        },
        "links": {"validate": False, "probe_timeout": PROBE_TIMEOUT},
        "deploy": {
            "repository": defaults.deploy.repository,
            "branches": {"main": "main", "dev": "dev"},
            "depth": 1,
        },
        "ci": {"env_var": "TEAMCITY_VERSION", "staging_folder": "Staging"},
        "steps": {"default": defaults.steps.default},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
