"""Optional MCP server presets written to .kiro/settings/mcp.local.json."""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from kiro_best_practices.errors import ConfigError

MCP_PRESETS: Dict[str, Dict[str, Any]] = {
    "aws-docs": {
        "command": "uvx",
        "args": ["awslabs.aws-documentation-mcp-server@latest"],
        "env": {"FASTMCP_LOG_LEVEL": "ERROR"},
        "disabled": False,
        "autoApprove": [],
    },
    "terraform": {
        "command": "uvx",
        "args": ["awslabs.terraform-mcp-server@latest"],
        "env": {"FASTMCP_LOG_LEVEL": "ERROR"},
        "disabled": False,
        "autoApprove": [],
    },
    "playwright": {
        "command": "npx",
        "args": ["-y", "@executeautomation/playwright-mcp-server"],
        "disabled": False,
        "autoApprove": [],
    },
}

MCP_CHOICES = [
    ("aws-docs - AWS documentation search", "aws-docs"),
    ("terraform - Terraform operations", "terraform"),
    ("playwright - Browser automation", "playwright"),
    ("All of the above", "all"),
    ("None (skip)", "none"),
]


def validate_choice(choice: str) -> str:
    if choice not in {value for _, value in MCP_CHOICES}:
        raise ConfigError(
            f"Unknown MCP server choice '{choice}'",
            hints=["Use aws-docs, terraform, playwright, all or none"],
        )
    return choice


def write_mcp_local(settings_dir: Path, choice: str, example: Optional[Path] = None) -> Optional[Path]:
    """
    Write mcp.local.json for the chosen preset.

    "all" copies the template's mcp.local.json.example when available,
    "none" writes nothing.

    Returns:
        Path written, or None
    """
    validate_choice(choice)
    if choice == "none":
        return None

    target = settings_dir / "mcp.local.json"
    settings_dir.mkdir(parents=True, exist_ok=True)
    if choice == "all" and example is not None and example.exists():
        shutil.copyfile(example, target)
        return target

    servers = MCP_PRESETS if choice == "all" else {choice: MCP_PRESETS[choice]}
    target.write_text(json.dumps({"mcpServers": servers}, indent=2) + "\n", encoding="utf-8")
    return target
