"""Git metadata discovery for the ``<scm>`` section and ``pom.properties``.

Reads the on-disk git layout directly (``.git``, ``HEAD``, ref files and
``config``); git itself is never invoked. Every lookup is best-effort: a
missing or unreadable file means "no metadata", never an error for the
caller. Undecodable bytes are replaced rather than rejected.
"""

import re
import sys
from pathlib import Path
from typing import Optional

from .project_models import ScmInfo

# Ref chains longer than this are treated as unresolvable.
_MAX_REF_DEPTH = 10

_GITDIR_RE = re.compile(r"gitdir: (\S+)")
_REF_RE = re.compile(r"ref: (\S+)")
_URL_LINE_RE = re.compile(r"url\s*=\s*(\S*)\s*")

# Hosted remotes: ``git@host:user/repo.git`` and ``scheme://[git@]host/user/repo.git``.
_SCP_URL_RE = re.compile(r"(?:git@)?([^:/@]+):([^/]+)/([^/]+)\.git")
_SCHEME_URL_RE = re.compile(r"[^:]+://(?:git@)?([^/@:]+)/([^/]+)/([^/]+)\.git")


def resolve_git_dir(root: str, alternate_dir: Optional[str] = None) -> Path:
    """Locate the git metadata directory for a project.

    Uses ``<alternate_dir>/.git`` when given, ``<root>/.git`` otherwise.
    When ``.git`` is a file (worktrees, submodules) its ``gitdir: <path>``
    line is followed; a relative target is resolved against the file's
    directory.

    Args:
        root: Project root directory.
        alternate_dir: Optional directory holding ``.git`` instead of the root.

    Returns:
        Path of the metadata directory. It may not exist.
    """
    git_path = Path(alternate_dir or root) / ".git"
    if not git_path.is_file():
        return git_path
    try:
        with open(git_path, encoding="utf-8", errors="replace") as f:
            match = _GITDIR_RE.search(f.read())
    except OSError as e:
        print(f"WARNING: cannot read {git_path}: {e}", file=sys.stderr)
        return git_path
    if not match:
        print(f"WARNING: {git_path} has no 'gitdir:' line, ignoring it", file=sys.stderr)
        return git_path
    return git_path.parent / match.group(1)


def read_git_ref(git_dir: Path, ref_path: str, _depth: int = 0) -> Optional[str]:
    """Read the commit SHA1 a ref points to.

    Symbolic refs (``ref: refs/heads/x``) are followed.

    Returns:
        The trimmed SHA1, or ``None`` if the ref file cannot be read.
    """
    if _depth > _MAX_REF_DEPTH:
        return None
    try:
        with open(Path(git_dir) / ref_path, encoding="utf-8", errors="replace") as f:
            content = f.read().strip()
    except OSError:
        return None
    match = _REF_RE.match(content)
    if match:
        return read_git_ref(git_dir, match.group(1), _depth + 1)
    return content or None


def read_git_head(git_dir: Path) -> Optional[str]:
    """Read ``HEAD`` and return the commit SHA1 it resolves to.

    Raises:
        OSError: If ``HEAD`` itself is missing or unreadable.

    Returns:
        The SHA1, or ``None`` if HEAD names a branch with no commits yet.
    """
    with open(Path(git_dir) / "HEAD", encoding="utf-8", errors="replace") as f:
        head = f.read().strip()
    match = _REF_RE.search(head)
    if match:
        return read_git_ref(git_dir, match.group(1))
    return head or None


def read_git_origin(git_dir: Path) -> Optional[str]:
    """Read the URL of the ``origin`` remote from ``<git_dir>/config``.

    Raises:
        OSError: If the config file is missing or unreadable.
    """
    with open(Path(git_dir) / "config", encoding="utf-8", errors="replace") as f:
        in_origin = False
        for raw in f:
            line = raw.strip()
            if line == '[remote "origin"]':
                in_origin = True
                continue
            if not in_origin:
                continue
            if line.startswith("["):
                return None
            match = _URL_LINE_RE.fullmatch(line)
            if match:
                return match.group(1)
    return None


def parse_hosted_url(url: Optional[str]) -> Optional[tuple[str, str, str]]:
    """Parse a hosted remote URL into ``(host, user, repo)``.

    >>> parse_hosted_url("git@github.com:alice/proj.git")
    ('github.com', 'alice', 'proj')
    """
    if not url:
        return None
    match = _SCP_URL_RE.fullmatch(url) or _SCHEME_URL_RE.fullmatch(url)
    if not match:
        return None
    return match.group(1), match.group(2), match.group(3)


def hosted_urls(url: Optional[str]) -> Optional[dict]:
    """Derive clone and browse URLs from a hosted remote URL.

    Returns:
        A dict with ``public_clone``, ``dev_clone`` and ``browse`` keys, or
        ``None`` if the URL is not a recognized ``host/user/repo.git`` remote.
    """
    parsed = parse_hosted_url(url)
    if not parsed:
        return None
    host, user, repo = parsed
    return {
        "public_clone": f"git://{host}/{user}/{repo}.git",
        "dev_clone": f"ssh://git@{host}/{user}/{repo}.git",
        "browse": f"https://{host}/{user}/{repo}",
    }


def make_git_scm(git_dir: Path) -> Optional[ScmInfo]:
    """Build :class:`ScmInfo` from a git metadata directory.

    Returns:
        The derived SCM info, or ``None`` when the directory, its ``config``
        or its ``HEAD`` is missing or unreadable.
    """
    try:
        origin = read_git_origin(git_dir)
        head = read_git_head(git_dir)
    except OSError:
        return None
    urls = hosted_urls(origin) or {}
    return ScmInfo(
        connection=_scm_git(urls.get("public_clone")),
        developer_connection=_scm_git(urls.get("dev_clone")),
        url=urls.get("browse"),
        tag=head,
    )


def read_revision(root: str, alternate_dir: Optional[str] = None) -> Optional[str]:
    """Return the current commit SHA1 of the project's repository, if any."""
    git_dir = resolve_git_dir(root, alternate_dir)
    if not git_dir.exists():
        return None
    try:
        return read_git_head(git_dir)
    except OSError:
        return None


def _scm_git(clone_url: Optional[str]) -> Optional[str]:
    return f"scm:git:{clone_url}" if clone_url else None
