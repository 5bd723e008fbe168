#!/usr/bin/env python3
"""
Build script for the find-order Lambda function
"""
import os
import shutil
import subprocess
import sys
import zipfile
from pathlib import Path

PACKAGE_NAME = "order_lookup"


def pip_install_command(requirements_file: Path, target_dir: Path) -> list:
    # Full dependency tree: pydantic-core, httpcore and friends must ship in the zip
    return [
        sys.executable, "-m", "pip", "install",
        "-r", str(requirements_file),
        "-t", str(target_dir),
    ]


def build_function(function_dir: Path, src_dir: Path, build_dir: Path) -> Path:
    """Package one function directory, the shared package and its requirements into a zip."""
    function_name = function_dir.name
    zip_path = build_dir / f"{function_name}.zip"

    print(f"Building {function_name}...")

    # Create temporary directory for packaging
    temp_dir = build_dir / f"temp_{function_name}"
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
    temp_dir.mkdir()

    # Copy function files and the shared package next to them
    shutil.copytree(function_dir, temp_dir, dirs_exist_ok=True)
    shutil.copytree(
        src_dir / PACKAGE_NAME,
        temp_dir / PACKAGE_NAME,
        ignore=shutil.ignore_patterns("__pycache__", "*.pyc"),
    )

    # Install dependencies if requirements.txt exists
    requirements_file = function_dir / "requirements.txt"
    if requirements_file.exists():
        print(f"Installing dependencies for {function_name}...")
        subprocess.run(pip_install_command(requirements_file, temp_dir), check=True)

    # Create zip archive
    print(f"Creating {function_name}.zip...")
    with zipfile.ZipFile(zip_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
        for root, _, files in os.walk(temp_dir):
            for file in files:
                file_path = Path(root) / file
                arcname = file_path.relative_to(temp_dir)
                zipf.write(file_path, arcname)

    # Clean up temporary directory
    shutil.rmtree(temp_dir)

    print(f"{function_name}.zip created ({zip_path.stat().st_size} bytes)")
    return zip_path


def main():
    """Main build function"""
    project_root = Path(__file__).parent.parent
    src_dir = project_root / "src"
    build_dir = project_root / "build"

    # Create build directory
    build_dir.mkdir(exist_ok=True)

    # Every directory with a lambda_function.py is a deployable function
    functions = [d for d in src_dir.iterdir() if (d / "lambda_function.py").exists()]

    print(f"Building Lambda functions: {[f.name for f in functions]}")

    for function_dir in functions:
        build_function(function_dir, src_dir, build_dir)

    print("Build complete!")


if __name__ == "__main__":
    main()
