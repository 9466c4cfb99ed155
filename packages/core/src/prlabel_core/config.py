import os
from pathlib import Path
from typing import Optional

import yaml

# GitHub Actions passes an unset "label" input through as this literal.
LABEL_NOT_SET = "not set"

DEFAULT_CONFIG: dict = {
    "label": None,  # None = compute the decision but never touch labels
    "require_committers_approval": False,
    "remove_label_when_approval_missing": False,
    "comment": "",
    "pull_request_number": None,  # required for workflow_run triggered runs
    "num_of_approvals": 1,
}

# Action input name -> config key. Input names are upper-cased by the runner
# (numOfApprovals arrives as INPUT_NUMOFAPPROVALS).
_ACTION_INPUTS = {
    "INPUT_LABEL": "label",
    "INPUT_REQUIRE_COMMITTERS_APPROVAL": "require_committers_approval",
    "INPUT_REMOVE_LABEL_WHEN_APPROVAL_MISSING": "remove_label_when_approval_missing",
    "INPUT_COMMENT": "comment",
    "INPUT_PULLREQUESTNUMBER": "pull_request_number",
    "INPUT_NUMOFAPPROVALS": "num_of_approvals",
}

_BOOL_KEYS = ("require_committers_approval", "remove_label_when_approval_missing")


def load_config(config_path: str = ".prlabel.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prlabel.yml in the current directory
      3. GitHub Actions inputs (INPUT_* environment variables)
      4. CLI argument overrides

    Raises ValueError when a value cannot be used (e.g. numOfApprovals < 1).
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    for env_key, key in _ACTION_INPUTS.items():
        value = os.environ.get(env_key, "")
        if value != "":
            config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    _normalize(config)

    # Runner context comes from the environment only.
    config["github_repository"] = os.environ.get("GITHUB_REPOSITORY")
    config["github_event_name"] = os.environ.get("GITHUB_EVENT_NAME")
    config["github_event_path"] = os.environ.get("GITHUB_EVENT_PATH")
    config["github_output"] = os.environ.get("GITHUB_OUTPUT")

    return config


def get_required_env(key: str) -> str:
    value = os.environ.get(key)
    if value is None:
        raise ValueError(f"{key} was not defined.")
    return value


def _normalize(config: dict) -> None:
    for key in _BOOL_KEYS:
        config[key] = _as_bool(config[key])

    label = config.get("label")
    if label is not None:
        label = str(label).strip()
        config["label"] = None if label in ("", LABEL_NOT_SET) else label

    config["comment"] = config.get("comment") or ""

    try:
        num_of_approvals = int(config["num_of_approvals"])
    except (TypeError, ValueError):
        raise ValueError(f"numOfApprovals must be a positive integer, got {config['num_of_approvals']!r}.")
    if num_of_approvals < 1:
        raise ValueError(f"numOfApprovals must be a positive integer, got {num_of_approvals}.")
    config["num_of_approvals"] = num_of_approvals

    pr_number = config.get("pull_request_number")
    if pr_number in (None, "", LABEL_NOT_SET):
        config["pull_request_number"] = None
    else:
        try:
            config["pull_request_number"] = int(pr_number)
        except (TypeError, ValueError):
            raise ValueError(f"pullRequestNumber must be an integer, got {pr_number!r}.")


def _as_bool(value) -> bool:
    # Action inputs are strings; only an explicit "true" switches a flag on.
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"
