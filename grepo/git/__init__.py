"""Git access and multi-repository operations.

- Repository / GitCli: read-only queries against one repository
- scan_repos / dispatch: operations across the watch list
"""

from grepo.git.fake import FakeGit, FakeRepo
from grepo.git.multi import (
    BaseDirNotFound,
    BranchSearch,
    CommitSearch,
    CurrentBranch,
    InspectionError,
    InspectionRequest,
    ListBranches,
    RepoOutcome,
    SearchScope,
    dispatch,
    inspect_repo,
    scan_repos,
)
from grepo.git.repository import (
    Commit,
    GitCli,
    GitError,
    GitProtocol,
    Repository,
)

__all__ = [
    # Repository
    "Commit",
    "GitCli",
    "GitError",
    "GitProtocol",
    "Repository",
    # Fake
    "FakeGit",
    "FakeRepo",
    # Multi
    "BaseDirNotFound",
    "BranchSearch",
    "CommitSearch",
    "CurrentBranch",
    "InspectionError",
    "InspectionRequest",
    "ListBranches",
    "RepoOutcome",
    "SearchScope",
    "dispatch",
    "inspect_repo",
    "scan_repos",
]
