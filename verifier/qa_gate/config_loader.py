import os
from pathlib import Path

import yaml

from verifier.qa_gate.github_client import DEFAULT_API_BASE as GITHUB_API_BASE
from verifier.qa_gate.logger import NullLogger


class ConfigLoadError(Exception):
    pass


DEFAULT_CONFIG_PATH = "config/qa-verifier.yaml"

REQUIRED_KEYS = {
    "version",
    "bugzilla",
    "github",
}


def default_config_path():
    return os.environ.get("QA_VERIFIER_CONFIG", DEFAULT_CONFIG_PATH)


def _validate(config, path, logger):
    if not isinstance(config, dict):
        logger.log("config_loader", f"invalid_mapping path={path}")
        raise ConfigLoadError("Config YAML must be a mapping")

    missing = sorted(REQUIRED_KEYS - set(config.keys()))
    if missing:
        logger.log("config_loader", f"missing_keys path={path} missing={','.join(missing)}")
        raise ConfigLoadError(f"Config missing required keys: {', '.join(missing)}")

    bugzilla = config.get("bugzilla")
    if not isinstance(bugzilla, dict) or not bugzilla.get("api_base"):
        logger.log("config_loader", f"missing_bugzilla_api_base path={path}")
        raise ConfigLoadError("Config bugzilla.api_base is required")

    github = config.get("github") or {}
    if not isinstance(github, dict):
        raise ConfigLoadError("Config github must be a mapping")
    github.setdefault("api_base", GITHUB_API_BASE)
    config["github"] = github

    lgtm = config.get("lgtm") or []
    if not isinstance(lgtm, list) or not all(isinstance(entry, dict) for entry in lgtm):
        logger.log("config_loader", f"invalid_lgtm path={path}")
        raise ConfigLoadError("Config lgtm must be a list of mappings")
    for entry in lgtm:
        repos = entry.get("repos", [])
        if not isinstance(repos, list) or not all(isinstance(name, str) for name in repos):
            logger.log("config_loader", f"invalid_lgtm_repos path={path}")
            raise ConfigLoadError("Config lgtm repos must be a list of org or org/repo names")
    config["lgtm"] = lgtm
    return config


def load_config(config_path=None, logger=None):
    logger = logger or NullLogger()
    path = Path(config_path or default_config_path())
    try:
        raw = path.read_text(encoding="utf-8")
    except Exception as exc:
        logger.log("config_loader", f"load_failed path={path} error={exc}")
        raise ConfigLoadError(f"Failed to read config: {exc}") from exc

    try:
        config = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        logger.log("config_loader", f"parse_failed path={path} error={exc}")
        raise ConfigLoadError(f"Failed to parse config YAML: {exc}") from exc

    config = _validate(config, path, logger)
    logger.log(
        "config_loader",
        f"loaded path={path} top_keys={','.join(sorted(config.keys()))}",
    )
    return config


def review_acts_as_lgtm(config, org, repo):
    """Whether an approving review counts as /lgtm for org/repo.

    An exact ``org/repo`` entry takes precedence over an ``org`` entry.
    """
    entries = (config or {}).get("lgtm") or []
    full_name = f"{org}/{repo}"
    for wanted in (full_name, org):
        for entry in entries:
            if wanted in (entry.get("repos") or []):
                return bool(entry.get("review_acts_as_lgtm", False))
    return False
