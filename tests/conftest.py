"""
Shared fixtures and configuration for diagsnap tests
"""

import os
import sys
import pytest

# Add src directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from diagsnap import Context


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Keep the update-mode variable and any local config out of tests"""
    monkeypatch.delenv("DIAGSNAP", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def context():
    """Context for a posix checkout at /tmp/proj"""
    return Context(
        package_name="demo",
        source_directory="/tmp/proj/tests/ui",
        workspace_root="/tmp/proj",
    )


@pytest.fixture
def windows_context():
    """Context for a windows checkout at C:\\proj"""
    return Context(
        package_name="demo",
        source_directory="C:\\proj\\tests\\ui",
        workspace_root="C:\\proj",
    )


@pytest.fixture
def sample_stderr():
    """Compiler output exercising every normalization level"""
    return (
        "error[E0308]: mismatched types\n"
        "  --> /tmp/proj/tests/ui/mismatch.rs:4:18\n"
        "   |\n"
        "4  |     let x: u8 = \"demo\";   \n"
        "   |                 ^^^^^^ expected `u8`, found `&str`\n"
        "\n"
        "error: aborting due to previous error\n"
        "\n"
        "Some errors have detailed explanations: E0308, E0425.\n"
        "For more information about an error, try `rustc --explain E0308`.\n"
        "For more information about this error, try `rustc --explain E0308`.\n"
        "error: Could not compile `demo-tests`.\n"
        "error: could not compile `demo-tests`.\n"
        "\n"
        "To learn more, run the command again with --verbose.\n"
    ).encode("utf-8")
