"""Project activity network: validate activity spans and precedence matrices, derive links."""
from pmnet.activities import ActivityParse, parse_activities
from pmnet.adjacency import AdjacencyParse, parse_adjacency
from pmnet.dates import normalize_date
from pmnet.errors import PmNetError
from pmnet.graph import GraphBuild, build_graph
from pmnet.network import ProjectNetwork

__all__ = [
    "ActivityParse",
    "AdjacencyParse",
    "GraphBuild",
    "PmNetError",
    "ProjectNetwork",
    "build_graph",
    "normalize_date",
    "parse_activities",
    "parse_adjacency",
]
