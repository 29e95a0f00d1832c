import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from vc_changelog.changelog.commit_model import RawCommit
from vc_changelog.vcs.git_client import GitClient, GitError


class DummyProc(SimpleNamespace):
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


LOG_OUTPUT = (
    "aaa111\x1ffeat(ui): b\x1fcloses #3\n\x1e\n"
    "bbb222\x1ffix: a\x1f\x1e\n"
    "ccc333\x1fdocs: multi\x1fline one\nline two\n\x1e\n"
)


class TestGitLog(unittest.TestCase):
    def _client_with(self, outputs):
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            if args[0] == "rev-parse":
                return outputs.get("rev-parse", DummyProc(returncode=0, stdout="abc\n", stderr=""))
            if args[0] == "log":
                return DummyProc(returncode=0, stdout=outputs.get("log", ""), stderr="")
            raise AssertionError(f"Unexpected git command: {args}")

        return fake_run, calls

    def test_parse_log_records(self) -> None:
        commits = GitClient.parse_log(LOG_OUTPUT)
        self.assertEqual(
            commits,
            [
                RawCommit(header="feat(ui): b", body="closes #3", hash="aaa111"),
                RawCommit(header="fix: a", body="", hash="bbb222"),
                RawCommit(header="docs: multi", body="line one\nline two", hash="ccc333"),
            ],
        )

    def test_parse_log_empty(self) -> None:
        self.assertEqual(GitClient.parse_log(""), [])

    def test_range_with_both_refs(self) -> None:
        fake_run, calls = self._client_with({"log": LOG_OUTPUT})
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            commits = GitClient(Path("/repo")).get_log("v1.0", "v1.1")
        self.assertEqual(len(commits), 3)
        self.assertIn("v1.0..v1.1", calls[-1])

    def test_revision_is_not_parsed_as_option(self) -> None:
        fake_run, calls = self._client_with({"log": ""})
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            GitClient(Path("/repo")).get_log("--output=x")
        args = calls[-1]
        self.assertLess(args.index("--end-of-options"), args.index("--output=x..HEAD"))

    def test_from_without_to_defaults_to_head(self) -> None:
        fake_run, calls = self._client_with({"log": ""})
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            commits = GitClient(Path("/repo")).get_log("v1.0")
        self.assertEqual(commits, [])
        self.assertIn("v1.0..HEAD", calls[-1])

    def test_to_without_from(self) -> None:
        fake_run, calls = self._client_with({"log": ""})
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            GitClient(Path("/repo")).get_log(None, "v2.0")
        self.assertIn("v2.0", calls[-1])
        self.assertFalse(any(".." in arg for arg in calls[-1]))

    def test_full_history_of_empty_repository(self) -> None:
        fake_run, calls = self._client_with({"rev-parse": DummyProc(returncode=1, stdout="", stderr="")})
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            commits = GitClient(Path("/repo")).get_log()
        self.assertEqual(commits, [])
        self.assertFalse(any(args[0] == "log" for args in calls))

    def test_full_history(self) -> None:
        fake_run, calls = self._client_with({"log": LOG_OUTPUT})
        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            commits = GitClient(Path("/repo")).get_log()
        self.assertEqual([c.hash for c in commits], ["aaa111", "bbb222", "ccc333"])
        self.assertIn("HEAD", calls[-1])


class TestGitRun(unittest.TestCase):
    @patch("vc_changelog.vcs.git_client.subprocess.run")
    def test_run_raises_on_failure(self, mock_run) -> None:
        mock_run.return_value = DummyProc(
            returncode=128, stdout="", stderr="fatal: bad revision 'nope..HEAD'\n"
        )
        with self.assertRaises(GitError) as ctx:
            GitClient(Path("/repo")).get_log("nope")
        self.assertIn("bad revision", str(ctx.exception))

    @patch("vc_changelog.vcs.git_client.subprocess.run")
    def test_run_without_check_returns_result(self, mock_run) -> None:
        mock_run.return_value = DummyProc(returncode=1, stdout="", stderr="")
        result = GitClient(Path("/repo"))._run(["rev-parse", "HEAD"], check=False)
        self.assertEqual(result.returncode, 1)
        self.assertEqual(mock_run.call_args[0][0], ["git", "rev-parse", "HEAD"])
        self.assertEqual(mock_run.call_args[1]["cwd"], Path("/repo"))

    @patch("vc_changelog.vcs.git_client.subprocess.run", side_effect=FileNotFoundError("git"))
    def test_missing_git_executable(self, _mock_run) -> None:
        with self.assertRaises(GitError):
            GitClient(Path("/repo"))._run(["log"])


class TestFindRepoRoot(unittest.TestCase):
    def test_find_repo_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".git").mkdir()
            nested = root / "a" / "b"
            nested.mkdir(parents=True)
            self.assertEqual(GitClient.find_repo_root(nested), root)

    def test_find_repo_root_none(self) -> None:
        with patch("pathlib.Path.exists", return_value=False):
            self.assertIsNone(GitClient.find_repo_root(Path("/tmp")))


if __name__ == "__main__":
    unittest.main()
