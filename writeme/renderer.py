"""Markdown README rendering for a scan report."""

from __future__ import annotations

from typing import Any, Dict, List

from .pipeline import ScanReport


def render_readme(report: ScanReport) -> str:
    meta = report.metadata
    title = meta.name or report.root.name or "Project"
    lines: List[str] = [f"# {title}", ""]

    if meta.description:
        lines.extend([meta.description, ""])
    if meta.version:
        lines.extend([f"**Version:** {meta.version}", ""])
    if meta.repository:
        lines.extend([f"**Repository:** <{meta.repository.url}>", ""])

    if report.technologies:
        lines.extend(["## Built with", ""])
        lines.extend(f"- {tech}" for tech in report.technologies)
        lines.append("")

    if meta.contributors:
        lines.extend(["## Contributors", ""])
        for contributor in meta.contributors:
            label = contributor.name or contributor.email or ""
            if contributor.url:
                label = f"[{label}]({contributor.url})"
            elif contributor.email and contributor.name:
                label = f"{label} ({contributor.email})"
            lines.append(f"- {label}")
        lines.append("")

    lines.extend(["## License", ""])
    if meta.license:
        lines.append(f"Distributed under the {meta.license} license.")
    else:
        lines.append("No license file was found for this project.")

    return "\n".join(lines).strip() + "\n"


def report_as_dict(report: ScanReport) -> Dict[str, Any]:
    """JSON-friendly view of *report*."""
    meta = report.metadata
    return {
        "root": str(report.root),
        "configs": list(report.configs),
        "technologies": list(report.technologies),
        "name": meta.name,
        "description": meta.description,
        "version": meta.version,
        "repository": (
            {
                "url": meta.repository.url,
                "platform": meta.repository.platform.value,
                "name": meta.repository.name,
            }
            if meta.repository
            else None
        ),
        "license": (
            {
                "kind": meta.license.kind,
                "path": meta.license.path,
                "year": meta.license.year,
                "holder": meta.license.holder,
            }
            if meta.license
            else None
        ),
        "contributors": (
            [
                {"name": c.name, "email": c.email, "url": c.url}
                for c in meta.contributors
            ]
            if meta.contributors is not None
            else None
        ),
        "dependencies": (
            [{"name": d.name, "version": d.version} for d in meta.dependencies]
            if meta.dependencies is not None
            else None
        ),
    }


__all__ = ["render_readme", "report_as_dict"]
