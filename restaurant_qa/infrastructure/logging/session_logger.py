"""Session-based markdown logger."""

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Optional


class SessionLogger:
    """
    Logger that saves each pipeline step's output to a markdown file.

    One directory is created per pipeline run, so concurrent runs never share
    a session. A disabled logger accepts every call and writes nothing.
    """

    def __init__(self, base_dir: Optional[Path] = None, enabled: bool = True) -> None:
        """
        Initialize the logger.

        Args:
            base_dir: Base directory for logs. Defaults to 'logs' in the project root.
            enabled: When False, no files are written.
        """
        if base_dir:
            self.base_dir = Path(base_dir)
        else:
            self.base_dir = Path(__file__).parent.parent.parent.parent / "logs"

        self.enabled = enabled
        self.session_dir: Optional[Path] = None
        self.step_counter: int = 0

    def start_session(self, question: str = "") -> Optional[str]:
        """
        Start a new session by creating a timestamped directory.

        Args:
            question: Question being answered in this run.

        Returns:
            Path of the session directory, or None when disabled.
        """
        if not self.enabled:
            return None

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.session_dir = self.base_dir / f"{timestamp}_{uuid.uuid4().hex[:8]}"
        self.session_dir.mkdir(parents=True, exist_ok=True)
        self.step_counter = 0

        metadata_content = f"""# Session: {self.session_dir.name}

- **Started at**: {datetime.now().isoformat()}
- **Question**: {question}

---

"""
        (self.session_dir / "00_Metadata.md").write_text(metadata_content, encoding="utf-8")
        return str(self.session_dir)

    def log_step(
        self,
        step_name: str,
        result: Any,
        input_text: Optional[str] = None,
        execution_time_ms: Optional[float] = None,
    ) -> None:
        """
        Log a step's result to a numbered markdown file.

        Args:
            step_name: Name of the pipeline step.
            result: JSON-serializable step output.
            input_text: Input sent to the step (optional).
            execution_time_ms: Execution time in milliseconds (optional).
        """
        if not self.enabled or self.session_dir is None:
            return

        self.step_counter += 1
        filepath = self.session_dir / f"{self.step_counter:02d}_{step_name}.md"

        content = f"# {step_name}\n\n"
        content += f"**Execution Time**: {execution_time_ms:.2f} ms\n\n" if execution_time_ms else ""
        content += f"**Timestamp**: {datetime.now().isoformat()}\n\n"

        if input_text:
            content += f"## Input\n\n```\n{input_text}\n```\n\n"

        content += (
            "## Result\n\n```json\n"
            f"{json.dumps(result, indent=2, ensure_ascii=False, default=str)}\n```\n"
        )
        filepath.write_text(content, encoding="utf-8")

    def end_session(self, success: bool, final_message: str = "") -> None:
        """Write the run outcome and close the session."""
        if self.enabled and self.session_dir is not None:
            outcome = "success" if success else "failure"
            summary = f"# Outcome: {outcome}\n\n```\n{final_message}\n```\n"
            (self.session_dir / "99_Outcome.md").write_text(summary, encoding="utf-8")
        self.session_dir = None
        self.step_counter = 0
