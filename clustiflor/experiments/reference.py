"""Running external reference biclustering tools as subprocesses.

The tool reads the graph from `graph_path`, writes its clusters (by label)
to `results_path` and its wall-clock time in seconds to `duration_path`.
Only this module spawns processes; the results are turned into a
Biclustering by clustiflor.biclusters.adapter.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from clustiflor.biclusters.adapter import load_reference_biclusters
from clustiflor.biclusters.types import Biclustering
from clustiflor.graph.io import write_graph
from clustiflor.graph.types import WeightedBipartiteGraph

log = logging.getLogger(__name__)


def read_duration_file(path: str | Path) -> float:
    """Return the first line of `path` that parses as a float.

    Returns:
        The duration in seconds, or 0.0 if no line is numeric.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path) as f:
        for line in f:
            try:
                return float(line.strip())
            except ValueError:
                continue
    log.warning("No duration found in %s", path)
    return 0.0


@dataclass(frozen=True, slots=True)
class ExternalTool:
    """A reference biclustering tool invoked through the command line."""

    name: str
    command: tuple[str, ...]
    graph_path: Path = Path("gene.adj")
    results_path: Path | None = None
    duration_path: Path | None = None
    delimiter: str = " "

    def __post_init__(self) -> None:
        slug = self.name.lower()
        if self.results_path is None:
            object.__setattr__(self, "results_path", Path(f"{slug}_results.txt"))
        if self.duration_path is None:
            object.__setattr__(self, "duration_path", Path(f"{slug}_duration.txt"))

    def __call__(self, graph: WeightedBipartiteGraph) -> tuple[Biclustering, float]:
        """Run the tool on `graph`.

        Returns:
            (adapted biclusters, reported duration in seconds).

        Raises:
            subprocess.CalledProcessError: If the tool exits non-zero.
            OSError: If a file cannot be written or read.
            MappingError: If the tool reports a label the graph lacks.
        """
        write_graph(graph, self.graph_path, delimiter=self.delimiter, include_labels=False)
        log.info("Running %s: %s", self.name, " ".join(self.command))
        subprocess.run(list(self.command), check=True)
        _, _, map_a, map_b = graph.get_labels()
        biclusters = load_reference_biclusters(self.results_path, map_a, map_b)
        return biclusters, read_duration_file(self.duration_path)
