"""Project network service: the three read operations over the configured sources"""
import os
from typing import Optional

from pmnet.activities import ActivityParse, parse_activities
from pmnet.adjacency import AdjacencyParse, parse_adjacency
from pmnet.errors import PmNetError, SourceNotFound
from pmnet.graph import build_graph, ensure_sources
from pmnet.io_utils import load_constants, read_activity_rows, read_matrix_rows
from pmnet.logging import get_logger
from pmnet.models import (
    ActivityReport, AdjacencyReport, CombinedGraph, ErrorCode, NetworkConstants
)

logger = get_logger(__name__)


class ProjectNetwork:
    """Reads, validates and combines the activity and adjacency datasets.

    Holds configuration only; every call re-reads both files and builds its
    own collections, so one instance can serve concurrent requests.
    """

    def __init__(self, constants: Optional[NetworkConstants] = None,
                 constants_file: Optional[str] = None):
        self.constants = constants or load_constants(constants_file)

    @property
    def data_dir(self) -> str:
        return self.constants.data.directory

    @property
    def activity_file(self) -> str:
        return self.constants.data.activity_file

    @property
    def adjacency_file(self) -> str:
        return self.constants.data.adjacency_file

    @property
    def activity_path(self) -> str:
        return os.path.join(self.data_dir, self.activity_file)

    @property
    def adjacency_path(self) -> str:
        return os.path.join(self.data_dir, self.adjacency_file)

    def _parse_activities(self) -> ActivityParse:
        return parse_activities(read_activity_rows(self.activity_path))

    def _parse_adjacency(self) -> AdjacencyParse:
        return parse_adjacency(read_matrix_rows(self.adjacency_path))

    def get_activities(self) -> ActivityReport:
        """Validated activity records in file order"""
        if not os.path.isfile(self.activity_path):
            raise self._failed(SourceNotFound(ErrorCode.AP_FILE_NOT_FOUND, self.activity_file))
        try:
            return self._parse_activities().to_report(self.activity_file)
        except PmNetError as e:
            raise self._failed(e)

    def get_adjacency(self) -> AdjacencyReport:
        """Validated 0/1 matrix, rows in file order"""
        if not os.path.isfile(self.adjacency_path):
            raise self._failed(SourceNotFound(ErrorCode.AM_FILE_NOT_FOUND, self.adjacency_file))
        try:
            return self._parse_adjacency().to_report(self.adjacency_file)
        except PmNetError as e:
            raise self._failed(e)

    def get_combined_graph(self) -> CombinedGraph:
        """Precedence links with gap days, or every issue found in either file"""
        try:
            ensure_sources(self.activity_path, self.adjacency_path)
            # both reads complete before construction starts
            activities = self._parse_activities()
            adjacency = self._parse_adjacency()
            build = build_graph(
                activities,
                adjacency,
                activity_file=self.activity_file,
                adjacency_file=self.adjacency_file,
            )
            return build.to_graph()
        except PmNetError as e:
            raise self._failed(e)

    def _failed(self, error: PmNetError) -> PmNetError:
        logger.warning(
            "request_failed",
            code=error.code.value,
            status=error.status_code,
            details=len(error.details),
        )
        return error
