"""Analyze command orchestration for CLI.

This module provides the AnalyzeCommand class that runs the analyzer over a
Confluence export. It finds the metadata documents of the export, loads the
workspace tables before each document, runs ConfluenceAnalyzer and saves the
tables again afterwards.
"""

import logging
import os
from typing import List, Optional

from migrate_confluence.analyzer.config_loader import ConfigLoader
from migrate_confluence.analyzer.confluence_analyzer import ConfluenceAnalyzer
from migrate_confluence.analyzer.errors import ConfigError, ConfigFilesystemError
from migrate_confluence.analyzer.models import ANALYZER_TABLES, AnalyzerConfig
from migrate_confluence.export_index.errors import DocumentLoadError
from migrate_confluence.map_store.errors import MapStoreError
from migrate_confluence.map_store.map_store import MapStore
from migrate_confluence.map_store.workspace_store import WorkspaceStore

from .errors import SourceNotFoundError
from .models import ExitCode
from .output import OutputHandler

logger = logging.getLogger(__name__)


class AnalyzeCommand:
    """Orchestrates the analysis of a Confluence export for the CLI.

    The analysis workflow:
        1. Load the analyzer configuration (defaults if no file is given)
        2. Find the metadata documents of the export
        3. For each document: load the workspace tables, analyze, save the tables
        4. Print a summary per document and return an exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> command = AnalyzeCommand(workspace_dir="./workspace", output_handler=output)
        >>> exit_code = command.run("./confluence-export")
        >>> sys.exit(exit_code)
    """

    DEFAULT_WORKSPACE_DIR = '.migration-workspace'

    def __init__(
        self,
        workspace_dir: str = DEFAULT_WORKSPACE_DIR,
        config_path: Optional[str] = None,
        output_handler: Optional[OutputHandler] = None,
        store: Optional[MapStore] = None,
        workspace_store: Optional[WorkspaceStore] = None,
    ):
        """Initialize the command.

        Args:
            workspace_dir: Directory holding the persisted tables
            config_path: Optional analyzer configuration file
            output_handler: Terminal output (default OutputHandler())
            store: Map store (default: a store declaring the analyzer tables)
            workspace_store: Table persistence (default: YAML files in workspace_dir)
        """
        self.workspace_dir = workspace_dir
        self.config_path = config_path
        self.output = output_handler or OutputHandler()
        self.store = store or MapStore(ANALYZER_TABLES)
        self.workspace_store = workspace_store or WorkspaceStore(workspace_dir)

    def run(self, source: str) -> ExitCode:
        """Analyze every metadata document of an export.

        Args:
            source: Export directory (searched recursively) or a single document

        Returns:
            ExitCode of the run
        """
        try:
            config = self._load_config()
        except (ConfigError, ConfigFilesystemError) as e:
            logger.error(f"Configuration failed: {e}")
            self.output.error(str(e))
            return ExitCode.CONFIG_ERROR

        try:
            documents = self.find_documents(source, config.metadata_filename)
        except SourceNotFoundError as e:
            logger.error(str(e))
            self.output.error(str(e))
            return ExitCode.GENERAL_ERROR

        if not documents:
            self.output.warning(
                f"No '{config.metadata_filename}' found in {source}, nothing to analyze"
            )
            return ExitCode.SUCCESS

        analyzer = ConfluenceAnalyzer(self.store, config)

        for document_path in documents:
            try:
                self.workspace_store.load_into(self.store)
                conflicts_before = len(self.store.conflicts)

                with self.output.spinner(f"Analyzing {document_path}..."):
                    summary = analyzer.analyze_file(document_path)

                self.workspace_store.save(self.store)
            except DocumentLoadError as e:
                logger.error(f"Analysis aborted: {e}")
                self.output.error(str(e))
                return ExitCode.DOCUMENT_ERROR
            except MapStoreError as e:
                logger.error(f"Workspace failure: {e}")
                self.output.error(str(e))
                return ExitCode.GENERAL_ERROR

            self.output.print_summary(summary)
            self.output.print_conflicts(self.store.conflicts[conflicts_before:])

        self.output.success(
            f"Analyzed {len(documents)} document(s), tables saved to {self.workspace_dir}"
        )
        return ExitCode.SUCCESS

    def find_documents(self, source: str, metadata_filename: str) -> List[str]:
        """Return the metadata documents below an export source.

        Only files named metadata_filename count. A file source is returned
        when its name matches; a directory source is walked recursively in
        sorted order.

        Raises:
            SourceNotFoundError: If source does not exist
        """
        if os.path.isfile(source):
            if os.path.basename(source) != metadata_filename:
                logger.debug(f"{source} is not named '{metadata_filename}', skipping")
                return []
            return [source]

        if not os.path.isdir(source):
            raise SourceNotFoundError(source)

        documents = []
        for dirpath, dirnames, filenames in os.walk(source):
            dirnames.sort()
            if metadata_filename in filenames:
                documents.append(os.path.join(dirpath, metadata_filename))

        logger.debug(f"Found {len(documents)} metadata document(s) in {source}")
        return documents

    def _load_config(self) -> AnalyzerConfig:
        if self.config_path is None:
            return AnalyzerConfig()
        logger.info(f"Loading configuration from {self.config_path}")
        return ConfigLoader.load(self.config_path)
