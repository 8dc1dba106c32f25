"""
tests/test_cli.py
Tests for the scaffoldgen command-line interface.

``cli_main`` returns the exit code instead of exiting, so every test calls
it directly with an argv list.
"""

from __future__ import annotations

import pathlib
import sys
from typing import Any, Callable, Dict

import pytest

from scaffoldgen import __version__
from scaffoldgen.cli import (
    EXIT_CONFIG_ERROR,
    EXIT_DISCOVERY_ERROR,
    EXIT_SUCCESS,
    EXIT_WRITE_ERROR,
    cli_main,
)


# ===========================================================================
# Fixtures
# ===========================================================================


def _settings(models_namespace: str, **extra: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "models_namespace": models_namespace,
        "irepositories_namespace": "shop.irepositories",
        "repositories_namespace": "shop.repositories",
        "controllers_namespace": "shop.controllers",
    }
    data.update(extra)
    return data


@pytest.fixture()
def shop_config(
    config_file: Callable[..., pathlib.Path], shop_models: str
) -> pathlib.Path:
    """Config pointing at the shop models, without a project root."""
    return config_file({"scaffold": _settings(shop_models)})


# ===========================================================================
# generate
# ===========================================================================


class TestGenerateCommand:
    def test_generates_every_model(
        self,
        shop_config: pathlib.Path,
        project_root: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = cli_main(
            ["generate", "-c", str(shop_config), "--project-root", str(project_root)]
        )
        assert code == EXIT_SUCCESS
        for model in ("Product", "Order", "Customer", "Keyless"):
            assert (project_root / "Repositories" / f"{model}Repository.py").is_file()
        out = capsys.readouterr().out
        assert "SUCCESS" in out
        assert "Files written:    12" in out

    def test_project_root_from_config_file(
        self,
        config_file: Callable[..., pathlib.Path],
        shop_models: str,
        project_root: pathlib.Path,
    ) -> None:
        config = config_file(_settings(shop_models, project_root=str(project_root)))
        assert cli_main(["generate", "-c", str(config), "-q"]) == EXIT_SUCCESS
        assert (project_root / "Controllers" / "ProductController.py").is_file()

    def test_project_root_derived_from_interpreter(
        self,
        shop_config: pathlib.Path,
        tmp_path: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        checkout = tmp_path / "checkout"
        monkeypatch.setattr(sys, "executable", str(checkout / ".venv" / "bin" / "python"))
        assert cli_main(["generate", "-c", str(shop_config), "-q"]) == EXIT_SUCCESS
        assert (checkout / "IRepositories" / "IProductRepository.py").is_file()

    def test_quiet_prints_nothing(
        self,
        shop_config: pathlib.Path,
        project_root: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        cli_main(["generate", "-c", str(shop_config), "--project-root", str(project_root), "-q"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_verbose_logs_to_stderr(
        self,
        shop_config: pathlib.Path,
        project_root: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        cli_main(["generate", "-c", str(shop_config), "--project-root", str(project_root), "-v"])
        err = capsys.readouterr().err
        assert "INFO" in err
        assert "scaffoldgen.generator" in err

    def test_template_dir_and_extension_overrides(
        self,
        shop_config: pathlib.Path,
        project_root: pathlib.Path,
        all_tokens_template_dir: pathlib.Path,
    ) -> None:
        code = cli_main(
            [
                "generate",
                "-c", str(shop_config),
                "--project-root", str(project_root),
                "--template-dir", str(all_tokens_template_dir),
                "--extension", "txt",
                "-q",
            ]
        )
        assert code == EXIT_SUCCESS
        text = (project_root / "Controllers" / "OrderController.txt").read_text(encoding="utf-8")
        assert "model=Order\n" in text
        assert "key=str\n" in text


# ===========================================================================
# generate-one
# ===========================================================================


class TestGenerateOneCommand:
    def test_single_model(
        self, shop_config: pathlib.Path, shop_models: str, project_root: pathlib.Path
    ) -> None:
        code = cli_main(
            [
                "generate-one",
                "-c", str(shop_config),
                "-m", f"{shop_models}:Product",
                "--project-root", str(project_root),
                "-q",
            ]
        )
        assert code == EXIT_SUCCESS
        files = sorted(p.name for p in project_root.rglob("*") if p.is_file())
        assert files == ["IProductRepository.py", "ProductController.py", "ProductRepository.py"]

    def test_unknown_model_reference(
        self, shop_config: pathlib.Path, shop_models: str, project_root: pathlib.Path
    ) -> None:
        code = cli_main(
            [
                "generate-one",
                "-c", str(shop_config),
                "-m", f"{shop_models}:Nope",
                "--project-root", str(project_root),
                "-q",
            ]
        )
        assert code == EXIT_DISCOVERY_ERROR

    def test_model_option_is_required(self, shop_config: pathlib.Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main(["generate-one", "-c", str(shop_config)])
        assert exc_info.value.code == 2


# ===========================================================================
# Overwrite flag
# ===========================================================================


class TestOverwriteFlag:
    def test_existing_files_kept_unless_overwrite(
        self, shop_config: pathlib.Path, project_root: pathlib.Path
    ) -> None:
        argv = ["generate", "-c", str(shop_config), "--project-root", str(project_root), "-q"]
        assert cli_main(argv) == EXIT_SUCCESS

        target = project_root / "Controllers" / "ProductController.py"
        target.write_text("# mine\n", encoding="utf-8")

        assert cli_main(argv) == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8") == "# mine\n"

        assert cli_main(argv + ["--overwrite"]) == EXIT_SUCCESS
        assert "# mine" not in target.read_text(encoding="utf-8")


# ===========================================================================
# Error exit codes
# ===========================================================================


class TestExitCodes:
    def test_missing_config_file(self, tmp_path: pathlib.Path) -> None:
        code = cli_main(["generate", "-c", str(tmp_path / "absent.yaml"), "-q"])
        assert code == EXIT_CONFIG_ERROR

    def test_invalid_settings(
        self, config_file: Callable[..., pathlib.Path], project_root: pathlib.Path
    ) -> None:
        config = config_file({"models_namespace": "shop.models"})
        code = cli_main(["generate", "-c", str(config), "--project-root", str(project_root), "-q"])
        assert code == EXIT_CONFIG_ERROR

    def test_underivable_project_root(
        self, shop_config: pathlib.Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(sys, "executable", "/opt/python")
        assert cli_main(["generate", "-c", str(shop_config), "-q"]) == EXIT_CONFIG_ERROR

    def test_unimportable_models_namespace(
        self, config_file: Callable[..., pathlib.Path], project_root: pathlib.Path
    ) -> None:
        config = config_file(_settings("no_such_models_namespace_for_cli"))
        code = cli_main(["generate", "-c", str(config), "--project-root", str(project_root), "-q"])
        assert code == EXIT_DISCOVERY_ERROR

    def test_models_module_with_syntax_error(
        self,
        config_file: Callable[..., pathlib.Path],
        write_models: Callable[..., str],
        project_root: pathlib.Path,
    ) -> None:
        broken = write_models("class Product(:\n    pass\n")
        config = config_file(_settings(broken))
        code = cli_main(["generate", "-c", str(config), "--project-root", str(project_root), "-q"])
        assert code == EXIT_DISCOVERY_ERROR

    def test_write_failure(self, shop_config: pathlib.Path, project_root: pathlib.Path) -> None:
        (project_root / "Repositories" / "OrderRepository.py").mkdir(parents=True)
        code = cli_main(
            [
                "generate",
                "-c", str(shop_config),
                "--project-root", str(project_root),
                "--overwrite",
                "-q",
            ]
        )
        assert code == EXIT_WRITE_ERROR
        assert (project_root / "Repositories" / "ProductRepository.py").is_file()

    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main([])
        assert exc_info.value.code == 2

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli_main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
