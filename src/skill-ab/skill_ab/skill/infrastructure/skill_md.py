"""SKILL.md parsing and plugin-root discovery."""

import re
from pathlib import Path
from typing import Any

import yaml

from skill_ab.skill.domain.bundle import SkillBundle
from skill_ab.skill.domain.metadata import SkillMetadata
from skill_ab.skill.infrastructure.errors import (
    PluginDirNotFoundError,
    SkillNotFoundError,
    SkillParseError,
)

SKILL_FILE = "SKILL.md"
PLUGIN_MANIFEST = Path(".claude-plugin") / "plugin.json"
MAX_PLUGIN_SEARCH_DEPTH = 5

_FRONTMATTER_DELIMITER = "---"
_SECTION_PATTERN = re.compile(r"^##\s+(.+?)\s*$")
_NAME_LINE_PATTERN = re.compile(r"^name:\s*(.+?)\s*$", re.MULTILINE)
# Straight and typographic double quotes.
_QUOTED_PATTERN = re.compile(r"\"([^\"]+)\"|“([^”]+)”")


class SkillMdParser:
    """Reads a skill directory into a SkillBundle.

    Parsing is tolerant: a malformed YAML frontmatter falls back to a line scan
    for ``name:``, and absent sections simply come back empty. The only hard
    failures are a missing SKILL.md, a missing name and a missing plugin root.
    """

    def load(self, skill_dir: Path) -> SkillBundle:
        """Parse skill_dir/SKILL.md and locate the enclosing plugin.

        Raises:
            SkillNotFoundError: if SKILL.md does not exist.
            SkillParseError: if SKILL.md cannot be read as UTF-8 or its
                frontmatter has no name.
            PluginDirNotFoundError: if no ancestor holds .claude-plugin/plugin.json.
        """
        skill_file = skill_dir / SKILL_FILE
        if not skill_file.is_file():
            raise SkillNotFoundError(path=skill_file)

        try:
            text = skill_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SkillParseError(path=skill_file, reason=str(exc)) from exc

        metadata = parse_skill_md(text=text, source=skill_file)
        plugin_dir = find_plugin_dir(skill_dir=skill_dir)
        return SkillBundle(
            skill_dir=skill_dir, plugin_dir=plugin_dir, metadata=metadata
        )


def parse_skill_md(text: str, source: Path) -> SkillMetadata:
    """Build SkillMetadata from the raw contents of a SKILL.md file."""
    frontmatter_text, body = _split_frontmatter(text=text)
    fields = _parse_frontmatter(frontmatter_text=frontmatter_text)

    name = str(fields.get("name") or "").strip()
    if not name:
        raise SkillParseError(path=source, reason="frontmatter has no name")

    description = " ".join(str(fields.get("description") or "").split())
    sections = _split_sections(body=body)
    when_to_use = _section(sections=sections, prefix="when to use")

    return SkillMetadata(
        name=name,
        description=description,
        when_to_use=when_to_use,
        common_mistakes=_section(sections=sections, prefix="common mistakes"),
        core_patterns=_section(sections=sections, prefix="core patterns"),
        trigger_phrases=_quoted_phrases(text=description),
        when_to_use_bullets=[
            line.strip()[2:].strip()
            for line in when_to_use.splitlines()
            if line.strip().startswith("- ") and line.strip()[2:].strip()
        ],
    )


def find_plugin_dir(skill_dir: Path) -> Path:
    """Return the nearest ancestor of skill_dir that is a plugin root.

    Raises:
        PluginDirNotFoundError: if none of the closest ancestors qualifies.
    """
    resolved = skill_dir.resolve()
    for candidate in list(resolved.parents)[:MAX_PLUGIN_SEARCH_DEPTH]:
        if (candidate / PLUGIN_MANIFEST).is_file():
            return candidate
    raise PluginDirNotFoundError(skill_dir=skill_dir)


def _split_frontmatter(text: str) -> tuple[str, str]:
    lines = text.splitlines()
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return "", text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == _FRONTMATTER_DELIMITER:
            return "\n".join(lines[1:idx]), "\n".join(lines[idx + 1 :])
    # Unterminated frontmatter: treat everything after the opener as frontmatter.
    return "\n".join(lines[1:]), ""


def _parse_frontmatter(frontmatter_text: str) -> dict[str, Any]:
    if not frontmatter_text.strip():
        return {}
    try:
        loaded = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError:
        loaded = None
    if isinstance(loaded, dict):
        return loaded

    match = _NAME_LINE_PATTERN.search(frontmatter_text)
    return {"name": match.group(1)} if match else {}


def _split_sections(body: str) -> dict[str, str]:
    """Map each lower-cased level-2 heading to the text beneath it."""
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None
    for line in body.splitlines():
        match = _SECTION_PATTERN.match(line)
        if match:
            current = sections.setdefault(match.group(1).lower(), [])
            continue
        if current is not None:
            current.append(line)
    return {title: "\n".join(lines).strip() for title, lines in sections.items()}


def _section(sections: dict[str, str], prefix: str) -> str:
    for title, content in sections.items():
        if title.startswith(prefix):
            return content
    return ""


def _quoted_phrases(text: str) -> list[str]:
    phrases: list[str] = []
    for match in _QUOTED_PATTERN.finditer(text):
        phrase = (match.group(1) or match.group(2)).strip()
        if phrase and phrase not in phrases:
            phrases.append(phrase)
    return phrases
