"""Error formatting for CLI output."""

from gitsemver.versioning.exceptions import VersioningError


def format_versioning_error(error: VersioningError) -> str:
    """Format a VersioningError as a single diagnostic for the user.

    The first line names the component that failed; the context lines carry
    whatever the error knows about the offending input.

    Example output:
        error [config]: .gitsemver.yml: invalid value for 'mainBranchBehavior': ...
          Field: mainBranchBehavior
          File: .gitsemver.yml
    """
    lines = [f"error [{error.component}]: {error}"]

    context = []
    field = getattr(error, "field", None)
    if field:
        context.append(f"  Field: {field}")
    branch = getattr(error, "branch", None)
    if branch is not None:
        context.append(f"  Branch: {branch!r}")
    path = getattr(error, "path", None)
    if path:
        label = "File" if error.component == "config" else "Repository"
        context.append(f"  {label}: {path}")

    return "\n".join(lines + context)
