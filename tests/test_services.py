"""
Tests for the workspace and sync services.

Git is replaced by a MagicMock so no subprocess is ever run.
"""

from unittest.mock import MagicMock

import pytest

from repomanifest.domain import Category, Priority, Status
from repomanifest.errors import ValidationError
from repomanifest.exit_codes import CommandError
from repomanifest.services import SyncOutcome, SyncService, WorkspaceService


@pytest.fixture
def workspace_service(tmp_path, store):
    return WorkspaceService(root=tmp_path, store=store)


@pytest.fixture
def git():
    client = MagicMock()
    client.add_remote.return_value = (None, 0)
    client.fetch.return_value = ("From https://github.com/Wayru-Network/wayru-sdk", 0)
    client.merge.return_value = ("Already up to date.", 0)
    return client


class TestWorkspaceServiceQueries:
    """Tests for list, grouping and summary."""

    def test_list_sorted_by_name(self, workspace_service):
        assert [r.name for r in workspace_service.list()] == ["hotspot-app", "wayru-sdk"]

    def test_filter_by_category(self, workspace_service):
        assert [r.name for r in workspace_service.list(category="app")] == ["hotspot-app"]
        assert workspace_service.list(category=Category.CONTRACT) == []

    def test_filter_by_status(self, workspace_service):
        assert [r.name for r in workspace_service.list(status="forked")] == ["wayru-sdk"]

    def test_group_by_category(self, workspace_service):
        groups = WorkspaceService.group_by_category(workspace_service.list())
        assert list(groups) == [Category.APP, Category.PACKAGE]
        assert [r.name for r in groups[Category.PACKAGE]] == ["wayru-sdk"]

    def test_summary_has_every_status(self, workspace_service):
        summary = WorkspaceService.summary(workspace_service.list())
        assert summary == {"pending": 1, "forked": 1, "integrated": 0, "deprecated": 0}

    def test_workspace_exists(self, tmp_path, workspace_service):
        repo = workspace_service.list(category="app")[0]
        assert not workspace_service.workspace_exists(repo)
        (tmp_path / "apps" / "hotspot-app").mkdir(parents=True)
        assert workspace_service.workspace_exists(repo)


class TestWorkspaceServiceRegistration:
    """Tests for building, registering and scaffolding records."""

    def test_build_categorizes_and_derives_workspace(self, workspace_service):
        repo = workspace_service.build_repository(
            name="Explorer-Web",
            source="https://github.com/Wayru-Network/explorer",
            description="Network explorer",
            technologies=["React"],
        )
        assert repo.category is Category.APP
        assert repo.workspace == "apps/explorer-web"
        assert repo.priority is Priority.IMPORTANT
        assert repo.status is Status.PENDING
        assert repo.upstream_sync.last_sync is None
        assert repo.upstream_sync.branch == "main"

    def test_build_with_explicit_category(self, workspace_service):
        repo = workspace_service.build_repository(
            name="explorer",
            source="https://github.com/Wayru-Network/explorer",
            description="Network explorer",
            technologies=["React"],
            category="tool",
            priority="critical",
            maintainers=["ops@wayru.io"],
            branch="develop",
            sync_enabled=False,
        )
        assert repo.category is Category.TOOL
        assert repo.workspace == "packages/explorer"
        assert repo.maintainers == ["ops@wayru.io"]
        assert repo.upstream_sync.enabled is False

    def test_build_invalid(self, workspace_service):
        with pytest.raises(ValidationError) as excinfo:
            workspace_service.build_repository(
                name="explorer",
                source="not-a-url",
                description="Network explorer",
                technologies=[],
            )
        assert {"source", "technologies"} <= set(excinfo.value.locations)

    def test_register(self, workspace_service, store):
        repo = workspace_service.build_repository(
            name="staking-contracts",
            source="https://github.com/Wayru-Network/staking",
            description="Staking rewards",
            technologies=["Solidity"],
        )
        manifest = workspace_service.register(repo)
        assert manifest.names[-1] == "staking-contracts"
        assert store.load().get("staking-contracts").workspace == "contracts/staking-contracts"

    def test_register_duplicate(self, workspace_service, store):
        with pytest.raises(ValidationError):
            workspace_service.register(store.load().get("wayru-sdk"))

    def test_set_status(self, workspace_service, store):
        repo = workspace_service.set_status("hotspot-app", "forked")
        assert repo.status is Status.FORKED
        assert store.load().get("hotspot-app").status is Status.FORKED

    def test_set_status_unknown_repository(self, workspace_service):
        with pytest.raises(CommandError):
            workspace_service.set_status("missing", "forked")

    def test_scaffold(self, tmp_path, workspace_service, store):
        repo = store.load().get("wayru-sdk")
        created = workspace_service.scaffold(repo)
        workspace = tmp_path / "packages" / "wayru-sdk"
        assert created == [workspace / "src" / "__tests__" / ".gitkeep", workspace / "README.md"]
        readme = (workspace / "README.md").read_text()
        assert readme.startswith("# wayru-sdk")
        assert "- Upstream branch: main" in readme

    def test_scaffold_existing_workspace(self, tmp_path, workspace_service, store):
        (tmp_path / "packages" / "wayru-sdk").mkdir(parents=True)
        with pytest.raises(CommandError):
            workspace_service.scaffold(store.load().get("wayru-sdk"))


class TestSyncService:
    """Tests for upstream sync."""

    def make_workspace(self, root, workspace):
        (root / workspace).mkdir(parents=True)

    def test_sync_records_last_sync(self, tmp_path, store, git):
        self.make_workspace(tmp_path, "packages/wayru-sdk")
        service = SyncService(root=tmp_path, store=store, git_client=git)

        results = service.sync()

        by_name = {r.name: r for r in results}
        assert by_name["wayru-sdk"].outcome is SyncOutcome.SYNCED
        assert by_name["hotspot-app"].outcome is SyncOutcome.SKIPPED
        assert by_name["hotspot-app"].message == "sync disabled"

        saved = store.load().get("wayru-sdk")
        assert saved.upstream_sync.last_sync == by_name["wayru-sdk"].synced_at

        cwd = str(tmp_path / "packages" / "wayru-sdk")
        git.add_remote.assert_called_once_with(cwd, "upstream", "https://github.com/Wayru-Network/wayru-sdk")
        git.fetch.assert_called_once_with(cwd, "upstream", "main")
        git.merge.assert_called_once_with(cwd, "upstream/main")

    def test_missing_workspace_is_skipped(self, tmp_path, store, git):
        service = SyncService(root=tmp_path, store=store, git_client=git)
        before = store.path.read_text()

        results = service.sync("wayru-sdk")

        assert results[0].outcome is SyncOutcome.SKIPPED
        assert results[0].message == "workspace not found: packages/wayru-sdk"
        git.fetch.assert_not_called()
        # Nothing synced, so the manifest is not rewritten
        assert store.path.read_text() == before

    def test_failed_fetch(self, tmp_path, store, git):
        self.make_workspace(tmp_path, "packages/wayru-sdk")
        git.fetch.return_value = ("fatal: couldn't find remote ref main", 128)
        service = SyncService(root=tmp_path, store=store, git_client=git)

        result = service.sync("wayru-sdk")[0]

        assert result.outcome is SyncOutcome.FAILED
        assert result.message == "fetch failed: fatal: couldn't find remote ref main"
        git.merge.assert_not_called()
        assert store.load().get("wayru-sdk").upstream_sync.last_sync is None

    def test_custom_remote_name(self, tmp_path, store, git):
        self.make_workspace(tmp_path, "packages/wayru-sdk")
        service = SyncService(root=tmp_path, store=store, git_client=git, remote_name="source")

        service.sync("wayru-sdk")

        git.merge.assert_called_once_with(str(tmp_path / "packages" / "wayru-sdk"), "source/main")

    def test_unknown_name(self, tmp_path, store, git):
        service = SyncService(root=tmp_path, store=store, git_client=git)
        with pytest.raises(CommandError):
            service.sync("missing")

    def test_result_to_dict(self, tmp_path, store, git):
        service = SyncService(root=tmp_path, store=store, git_client=git)
        data = service.sync("hotspot-app")[0].to_dict()
        assert data == {"name": "hotspot-app", "outcome": "skipped", "message": "sync disabled", "synced_at": None}
