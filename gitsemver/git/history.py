"""
Read a repository snapshot through GitPython.

The whole commit graph and tag list are fetched with one ``git rev-list`` and
one ``git for-each-ref`` call, so the cost stays proportional to the size of
the history rather than to the number of commits times the number of tags.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from gitsemver.versioning.exceptions import EmptyHistoryError, RepositoryError
from gitsemver.versioning.version import parse_tag_version

from .graph import CommitGraph, Tag

logger = logging.getLogger(__name__)

_TAG_FORMAT = (
    "%(objectname) %(objecttype) %(*objectname) %(*objecttype) %(refname:strip=2)"
)


@dataclass(frozen=True)
class HistorySnapshot:
    """Everything the engine needs to know about one repository state."""

    path: Path
    graph: CommitGraph
    branch: str


def open_repository(repo_path: Union[str, Path]) -> Repo:
    """
    Open the git repository containing ``repo_path``.

    Raises:
        RepositoryError: If the path does not exist or is not inside a repository
    """
    try:
        return Repo(repo_path, search_parent_directories=True)
    except NoSuchPathError:
        raise RepositoryError(repo_path, "path does not exist")
    except InvalidGitRepositoryError:
        raise RepositoryError(repo_path, "not a git repository")


def repository_root(repo_path: Union[str, Path]) -> Path:
    """Top-level directory of the repository containing ``repo_path``."""
    repo = open_repository(repo_path)
    try:
        return Path(repo.working_tree_dir or repo.git_dir)
    finally:
        repo.close()


def parse_rev_list(output: str) -> Dict[str, Tuple[str, ...]]:
    """Parse ``git rev-list --parents`` output into a parent mapping."""
    parents: Dict[str, Tuple[str, ...]] = {}
    for line in output.splitlines():
        fields = line.split()
        if fields:
            parents[fields[0]] = tuple(fields[1:])
    return parents


def parse_tag_refs(output: str, tag_prefix: str = "") -> List[Tag]:
    """
    Parse ``git for-each-ref`` output for tags.

    Annotated tags are peeled to the object they point to. Tags that do not
    end up on a commit are skipped.
    """
    tags = []
    for line in output.splitlines():
        if not line.strip():
            continue
        sha, objtype, peeled_sha, peeled_type, name = line.split(" ", 4)
        if objtype == "tag":
            sha, objtype = peeled_sha, peeled_type
        if objtype != "commit":
            logger.debug(f"Skipping tag '{name}': points to a {objtype or 'unknown'}")
            continue
        version = parse_tag_version(name, tag_prefix)
        tags.append(Tag(name=name, target=sha, version=version))
    return tags


def is_shallow(repo: Repo) -> bool:
    return (Path(repo.common_dir) / "shallow").exists()


def has_reachable_version_tag(graph: CommitGraph) -> bool:
    return any(tag.version is not None for tag, _ in graph.reachable_tags())


def current_branch(repo: Repo, repo_path) -> str:
    """
    Name of the checked-out branch.

    Raises:
        RepositoryError: If HEAD is detached
    """
    if repo.head.is_detached:
        raise RepositoryError(
            repo_path,
            "HEAD is detached; pass the branch name explicitly (--branch)",
        )
    return repo.head.reference.name


def read_graph(repo: Repo, tag_prefix: str = "") -> CommitGraph:
    """Read all commits reachable from HEAD and every tag in one pass each."""
    if not repo.head.is_valid():
        return CommitGraph(head=None, shallow=is_shallow(repo))

    head = repo.head.commit.hexsha
    parents = parse_rev_list(repo.git.rev_list("--parents", "HEAD"))
    refs = repo.git.for_each_ref("refs/tags", format=_TAG_FORMAT)
    tags = tuple(parse_tag_refs(refs, tag_prefix))
    return CommitGraph.from_parents(head, parents, tags, shallow=is_shallow(repo))


def read_history(
    repo_path: Union[str, Path],
    tag_prefix: str = "",
    branch: Optional[str] = None,
) -> HistorySnapshot:
    """
    Take a snapshot of a repository.

    Args:
        repo_path: Path inside the repository
        tag_prefix: Prefix stripped from tag names before parsing them as versions
        branch: Branch name to use instead of the checked-out branch

    Returns:
        HistorySnapshot with the commit graph and branch name

    Raises:
        RepositoryError: If the repository cannot be read
        EmptyHistoryError: If the repository has no commits
    """
    repo = open_repository(repo_path)
    path = Path(repo.working_tree_dir or repo.git_dir)
    try:
        graph = read_graph(repo, tag_prefix)
        if graph.is_empty:
            raise EmptyHistoryError(path)
        if graph.shallow and not has_reachable_version_tag(graph):
            raise RepositoryError(
                path,
                "shallow clone without any reachable version tag; "
                "fetch more history (e.g. git fetch --unshallow --tags)",
            )
        if branch is None:
            branch = current_branch(repo, path)
    except GitCommandError as e:
        raise RepositoryError(path, f"git failed: {e}")
    finally:
        repo.close()

    logger.debug(
        f"Read {len(graph.commits)} commits and {len(graph.tags)} tags from {path}"
        + (" (shallow)" if graph.shallow else "")
    )
    return HistorySnapshot(path=path, graph=graph, branch=branch)
