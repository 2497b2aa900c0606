"""Hosted backend provisioning for Firebase-backed templates."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from crunchwrap.execution.process import Runner, run_tool, tool_available
from crunchwrap.execution.stages import StageResult

FIRESTORE_CONSOLE_URL = "https://console.firebase.google.com/project/_/firestore"


def provision_firebase(
    project_dir: Path,
    *,
    run: Runner = run_tool,
    which: Callable[[str], bool] = tool_available,
) -> StageResult:
    """Run 'firebase init' interactively inside the new project.

    Never fatal: a missing CLI or an incomplete init yields a warning with
    next steps.
    """
    if not which("firebase"):
        return StageResult.warn(
            "Could not run 'firebase init'. Make sure firebase-tools is installed "
            "(npm install -g firebase-tools)."
        )

    result = run(["firebase", "init"], cwd=project_dir, interactive=True)
    if result.succeeded:
        return StageResult.ok()

    if "firestore" in result.stderr.lower():
        return StageResult.warn(
            "It looks like Firestore is not yet enabled in your Firebase project. "
            f"Create it in the Firebase Console: {FIRESTORE_CONSOLE_URL}"
        )
    message = "Firebase initialization was not completed successfully."
    if result.stderr.strip():
        message = f"{message}\n{result.stderr.strip()}"
    return StageResult.warn(message)
