"""Seed scaffolding written into every scratch workspace of a trial."""

import re

from skill_ab.skill.domain.metadata import SkillMetadata

type SeedFiles = dict[str, str]

_README = "# Test Project\n"
_NODE_PATTERN = re.compile(
    r"\b(?:node|javascript|typescript|npm|react|vue|svelte)\b", re.I
)
_PYTHON_PATTERN = re.compile(r"\b(?:python|django|flask|pip)\b", re.I)


def seed_files_for(metadata: SkillMetadata) -> SeedFiles:
    """Return the placeholder project both sides of a trial start from.

    Every workspace gets a README. Skills that read as Node or Python flavoured
    additionally get a matching minimal manifest; anything else gets the
    generic ``package.json`` manifest.
    """
    haystack = f"{metadata.name} {metadata.description}"
    if _PYTHON_PATTERN.search(haystack) and not _NODE_PATTERN.search(haystack):
        return {
            "README.md": _README,
            "main.py": "print('hello')\n",
            "requirements.txt": "",
        }
    if _NODE_PATTERN.search(haystack):
        return {
            "README.md": _README,
            "package.json": '{"name":"test-project","version":"1.0.0","description":"test"}\n',
            "index.js": "console.log('hello');\n",
        }
    return {
        "README.md": _README,
        "package.json": '{"name":"test","version":"1.0.0"}\n',
    }
