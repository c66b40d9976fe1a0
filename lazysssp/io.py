"""Graph input/output helpers.

Node ids are integers in every supported format. Files are read into a
:class:`~lazysssp.graph.Graph` whose nodes are ``0 .. n-1`` so isolated
vertices survive a round trip.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .exceptions import GraphFormatError
from .graph import Graph

EdgeList = List[Tuple[int, int, float]]

_GRAPHML_NS = "{http://graphml.graphdrawing.org/xmlns}"


def _iter_edges(G: Graph) -> Iterable[Tuple[int, int, float]]:
    for edge in G.edges():
        yield edge.source, edge.target, edge.weight


def _read_csv(path: Path) -> Tuple[int, EdgeList]:
    """Read ``u,v,w`` rows (commas or tabs).

    Blank lines and lines starting with ``#`` are skipped.

    Raises:
        GraphFormatError: If a row is malformed or no edges are found.
    """
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = row.replace("\t", ",").split(",")
            if len(parts) < 3:
                raise GraphFormatError(f"{path}:{lineno}: expected 'u,v,w'")
            try:
                u = int(parts[0].strip())
                v = int(parts[1].strip())
                w = float(parts[2].strip())
            except ValueError as exc:
                raise GraphFormatError(f"{path}:{lineno}: {exc}") from exc
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return max_id + 1, edges


def _write_csv(path: Path, G: Graph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# u,v,w\n")
        for u, v, w in _iter_edges(G):
            fh.write(f"{u},{v},{w}\n")


def _read_jsonl(path: Path) -> Tuple[int, EdgeList]:
    """Read one ``{"u": .., "v": .., "w": ..}`` object per line.

    Raises:
        GraphFormatError: If a line is not a valid edge object or no edges
            are found.
    """
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                u = int(obj["u"])
                v = int(obj["v"])
                w = float(obj["w"])
            except (ValueError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"{path}:{lineno}: invalid edge record") from exc
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return max_id + 1, edges


def _write_jsonl(path: Path, G: Graph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for u, v, w in _iter_edges(G):
            fh.write(json.dumps({"u": u, "v": v, "w": w}) + "\n")


def _read_mtx(path: Path) -> Tuple[int, EdgeList]:
    """Read a Matrix Market coordinate file.

    Lines starting with ``%`` are comments. Indices in the file are 1-based
    and converted to 0-based; entries without a value get weight ``1.0``.

    Raises:
        GraphFormatError: If the size line is missing or malformed.
    """
    edges: EdgeList = []
    dims: Optional[Tuple[int, int]] = None
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("%"):
                continue
            parts = line.split()
            try:
                if dims is None:
                    dims = (int(parts[0]), int(parts[1]))
                    continue
                u = int(parts[0]) - 1
                v = int(parts[1]) - 1
                w = float(parts[2]) if len(parts) > 2 else 1.0
            except (ValueError, IndexError) as exc:
                raise GraphFormatError(f"malformed Matrix Market line: {line!r}") from exc
            edges.append((u, v, w))
    if dims is None:
        raise GraphFormatError("missing Matrix Market size line")
    return max(dims), edges


def _write_mtx(path: Path, G: Graph) -> None:
    edges = list(_iter_edges(G))
    n = G.num_nodes()
    with path.open("w", encoding="utf-8") as fh:
        fh.write("%%MatrixMarket matrix coordinate real general\n")
        fh.write(f"{n} {n} {len(edges)}\n")
        for u, v, w in edges:
            fh.write(f"{u + 1} {v + 1} {w}\n")


def _graphml_id(raw: str) -> int:
    return int(raw[1:]) if raw.startswith("n") else int(raw)


def _read_graphml(path: Path) -> Tuple[int, EdgeList]:
    """Read nodes and weighted edges from a GraphML document.

    The weight comes from a ``weight`` attribute or a ``<data key="w">``
    child and defaults to ``1.0``.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise GraphFormatError(f"invalid GraphML: {exc}") from exc
    edges: EdgeList = []
    max_id = -1
    try:
        for node in root.findall(f".//{_GRAPHML_NS}node"):
            max_id = max(max_id, _graphml_id(node.attrib.get("id", "")))
        for edge in root.findall(f".//{_GRAPHML_NS}edge"):
            u = _graphml_id(edge.attrib.get("source", ""))
            v = _graphml_id(edge.attrib.get("target", ""))
            w_attr = edge.attrib.get("weight")
            if w_attr is None:
                data = edge.find(f"{_GRAPHML_NS}data[@key='w']")
                w = float(data.text) if (data is not None and data.text is not None) else 1.0
            else:
                w = float(w_attr)
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    except ValueError as exc:
        raise GraphFormatError(f"invalid GraphML id or weight: {exc}") from exc
    if max_id < 0:
        raise GraphFormatError("no nodes parsed from file")
    return max_id + 1, edges


def _write_graphml(path: Path, G: Graph) -> None:
    kind = "directed" if G.directed else "undirected"
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append(f'  <graph id="G" edgedefault="{kind}">')
    for node in G.nodes():
        lines.append(f'    <node id="n{node.id}"/>')
    for u, v, w in _iter_edges(G):
        lines.append(f'    <edge source="n{u}" target="n{v}" weight="{w}"/>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    path.write_text("\n".join(lines), encoding="utf-8")


_FMT_READERS: Dict[str, Callable[[Path], Tuple[int, EdgeList]]] = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
    "mtx": _read_mtx,
    "graphml": _read_graphml,
}

_FMT_WRITERS: Dict[str, Callable[[Path, Graph], None]] = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
    "mtx": _write_mtx,
    "graphml": _write_graphml,
}

FORMATS = tuple(_FMT_READERS)


def _detect_format(path: Path) -> Optional[str]:
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    if ext == ".mtx":
        return "mtx"
    if ext == ".graphml":
        return "graphml"
    return None


def read_graph(path: str, fmt: Optional[str] = None, directed: bool = True) -> Graph:
    """Read a graph from ``path``.

    Args:
        path: File to read.
        fmt: One of :data:`FORMATS`; detected from the extension if ``None``.
        directed: Whether the resulting graph is directed.

    Raises:
        GraphFormatError: If the format is unknown or the file is invalid,
            including text that is not UTF-8.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError(f"unknown graph format for {path}")
    try:
        n, edges = _FMT_READERS[fmt](p)
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"{path}: not valid UTF-8 ({exc.reason})") from exc
    return Graph.from_edges(edges, nodes=range(n), directed=directed)


def write_graph(G: Graph, path: str, fmt: Optional[str] = None) -> None:
    """Write ``G`` to ``path``; integer node ids are required.

    Raises:
        GraphFormatError: If the format is unknown or a node id is not an
            integer.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError(f"unknown graph format for {path}")
    for node in G.nodes():
        if not isinstance(node.id, int):
            raise GraphFormatError(f"cannot write non-integer node id {node.id!r}")
    _FMT_WRITERS[fmt](p, G)


__all__ = ["FORMATS", "read_graph", "write_graph"]
