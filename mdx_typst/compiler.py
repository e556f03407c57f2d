"""Invoke the ``typst`` command line compiler."""

from __future__ import annotations

import dataclasses as dc
import logging
import shutil
import subprocess
import typing as typ

from .errors import CompileFailure

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class TypstCompiler:
    """Compile an assembled ``.typ`` file into a PDF.

    Attributes
    ----------
    executable : str
        Command name or path of the Typst CLI, looked up on ``PATH``.
    """

    executable: str = "typst"

    def command(self, source: Path, output: Path, *, root: Path) -> list[str]:
        """Return the argument vector for one compile run.

        Raises
        ------
        CompileFailure
            If the executable cannot be found.
        """
        exe = shutil.which(self.executable)
        if not exe:
            msg = f"typst CLI not found: {self.executable}"
            raise CompileFailure(msg)
        return [exe, "compile", "--root", str(root), str(source), str(output)]

    def compile(self, source: Path, output: Path, *, root: Path) -> Path:
        """Compile ``source`` into ``output`` with ``root`` as the project root.

        Returns
        -------
        Path
            The PDF path.

        Raises
        ------
        CompileFailure
            If the compiler is missing or exits with a non-zero status; the
            compiler's diagnostics are attached to the exception.
        """
        args = self.command(source, output, root=root)
        output.parent.mkdir(parents=True, exist_ok=True)
        logger.info("running %s", " ".join(args))
        try:
            subprocess.run(  # noqa: S603
                args,
                check=True,
                text=True,
                capture_output=True,
            )
        except subprocess.CalledProcessError as exc:
            msg = f"Typst compilation failed with exit status {exc.returncode}"
            raise CompileFailure(msg, output=exc.stderr or exc.stdout or "") from exc
        except OSError as exc:
            msg = f"Could not run {args[0]}: {exc}"
            raise CompileFailure(msg) from exc
        return output


__all__ = ["TypstCompiler"]
