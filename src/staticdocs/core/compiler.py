"""Static site compilation.

A compile pass runs in two steps, each an ordered list of phases:

    initiate:  cleanup_output_dir
    request:   generate_site, copy_assets

Callers may add phases to either list; phases within a pass always run in
list order, initiation phases first.
"""

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from staticdocs.core.dispatcher import RequestDispatcher
from staticdocs.core.routes import Route, RouteResolver
from staticdocs.errors import FileSystemError, RootNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ASSET_DIRS = ("assets",)
PUBLIC_DIR = "public"


@dataclass(frozen=True)
class CompileContext:
    """Settings for one compile pass."""

    output_dir: Path
    template_root: Path
    asset_dirs: tuple[str, ...] = DEFAULT_ASSET_DIRS


Phase = Callable[[CompileContext], object]
DispatcherFactory = Callable[[list[Route]], RequestDispatcher]
CopyTree = Callable[[Path, Path], object]


def output_path_for(output_dir: Path, endpoint: str) -> Path:
    """Map a normalized endpoint to the file it is written to.

    "/" -> index.html, "/feed.xml" -> feed.xml, "/guide" -> guide/index.html
    """
    path = endpoint.strip("/")
    if not path:
        return output_dir / "index.html"

    if "." in path.rsplit("/", 1)[-1]:
        return output_dir / path
    return output_dir / path / "index.html"


def copy_directory(source: Path, destination: Path) -> None:
    """Recursively copy a directory, merging into an existing destination."""
    shutil.copytree(source, destination, dirs_exist_ok=True)


def cleanup_output_dir(context: CompileContext) -> None:
    """Leave an existing, empty output directory.

    Raises:
        FileSystemError: If the directory cannot be created or emptied
    """
    output_dir = context.output_dir
    try:
        if not output_dir.exists() and not output_dir.is_symlink():
            output_dir.mkdir(parents=True)
            logger.info(f"Created output directory at {output_dir}")
            return

        if not output_dir.is_dir() or output_dir.is_symlink():
            output_dir.unlink()
            output_dir.mkdir(parents=True)
            logger.info(f"Recreated output directory at {output_dir}")
            return

        for child in output_dir.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
    except OSError as e:
        raise FileSystemError(f"Failed to clean output directory {output_dir}: {e}") from e

    logger.info(f"Cleaned output directory at {output_dir}")


class CompileOrchestrator:
    """Runs the phases of a compile pass in order."""

    def __init__(
        self,
        context: CompileContext,
        resolver: RouteResolver,
        dispatcher_factory: DispatcherFactory,
        *,
        copy_tree: CopyTree = copy_directory,
    ) -> None:
        """Initialize orchestrator.

        Args:
            context: Output and template locations for this pass
            resolver: Resolves the routes to generate
            dispatcher_factory: Builds a dispatcher from the pass's route table
            copy_tree: Routine copying an asset directory to its destination
        """
        self._context = context
        self._resolver = resolver
        self._dispatcher_factory = dispatcher_factory
        self._copy_tree = copy_tree

        self.initiated_phases: list[Phase] = [cleanup_output_dir]
        self.requested_phases: list[Phase] = [self.generate_site, self.copy_assets]

    @property
    def context(self) -> CompileContext:
        return self._context

    def run(self) -> None:
        """Run a full compile pass.

        Raises:
            RootNotFoundError: If the docs or template root is missing;
                raised before anything is written
            FileSystemError: If a phase fails to read or write files
        """
        self.check_roots()
        self.initiate()
        self.request()

    def check_roots(self) -> None:
        docs_root = self._resolver.provider.root
        if not self._resolver.provider.exists():
            raise RootNotFoundError(docs_root)
        if not self._context.template_root.is_dir():
            raise RootNotFoundError(self._context.template_root)

    def initiate(self) -> None:
        """Run the initiation phases (cleanup)."""
        for phase in self.initiated_phases:
            phase(self._context)

    def request(self) -> None:
        """Run the request phases (generation, assets)."""
        for phase in self.requested_phases:
            phase(self._context)

    def generate_site(self, context: CompileContext) -> list[Path]:
        """Render every route and write it below the output directory.

        The first failing write aborts the loop; files written before it stay.

        Returns:
            Written files, in route order

        Raises:
            FileSystemError: If a file or directory cannot be written
        """
        routes = self._resolver.routes()
        dispatcher = self._dispatcher_factory(routes)

        logger.info("Generating static site...")
        written: list[Path] = []
        for route in routes:
            file_path = output_path_for(context.output_dir, route.endpoint)
            try:
                response = dispatcher.dispatch(route.endpoint)
                file_path.parent.mkdir(parents=True, exist_ok=True)
                file_path.write_text(response.body, encoding="utf-8")
            except OSError as e:
                raise FileSystemError(f"Failed to generate {file_path}: {e}") from e

            written.append(file_path)
            logger.info(f"Generated: {route.endpoint} -> {file_path}")

        logger.info("Static site generation complete!")
        return written

    def copy_assets(self, context: CompileContext) -> list[Path]:
        """Copy asset directories from the template root to ``public/``.

        Missing asset directories are skipped.

        Returns:
            Destination directories that were written

        Raises:
            FileSystemError: If copying fails
        """
        copied: list[Path] = []
        for asset_dir in context.asset_dirs:
            source = context.template_root / asset_dir
            if not source.is_dir():
                logger.info(f"Skipping missing asset directory {source}")
                continue

            destination = context.output_dir / PUBLIC_DIR / asset_dir
            logger.info(f"Copying assets from {source} to {destination}")
            try:
                self._copy_tree(source, destination)
            except OSError as e:
                raise FileSystemError(f"Failed to copy {source} to {destination}: {e}") from e
            copied.append(destination)
        return copied
