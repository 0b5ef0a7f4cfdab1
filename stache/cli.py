from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import StacheConfig, find_config, load_config
from .data.builder import HashBuilder
from .engine import Template
from .errors import StacheError
from .jsonic import dumps as jdumps
from .template.nodes import ast_to_dict, collect_partial_nodes
from .template.partials import FileSystemPartialResolver
from .version import tool_version

STDIN_MARKER = "-"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stache",
        description="Logic-less mustache templates",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--verbose",
        action="store_true",
        help="отладочный лог в stderr (аналог STACHE_DEBUG=1)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для команд, которым нужны partial-шаблоны
    def add_partials(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--partials",
            metavar="DIR",
            help="каталог partial-шаблонов (по умолчанию - из stache.yaml или каталог шаблона)",
        )
        sp.add_argument(
            "--config",
            metavar="FILE",
            help="путь к stache.yaml (по умолчанию - в текущем каталоге)",
        )

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    sp_render.add_argument("template", help="файл шаблона или - для чтения из stdin")
    sp_render.add_argument(
        "--data",
        metavar="FILE|-",
        help="данные: .json/.yaml/.yml файл или - для JSON из stdin",
    )
    add_partials(sp_render)

    sp_parse = sub.add_parser("parse", help="Дерево узлов шаблона (JSON)")
    sp_parse.add_argument("template", help="файл шаблона или - для чтения из stdin")
    sp_parse.add_argument("--pretty", action="store_true", help="JSON с отступами")

    sp_list = sub.add_parser("list", help="Списки сущностей (JSON)")
    sp_list.add_argument("what", choices=["partials"], help="что вывести")
    add_partials(sp_list)

    return p


def _setup_logging(verbose: bool) -> None:
    if not (verbose or os.environ.get("STACHE_DEBUG")):
        return
    logger = logging.getLogger("stache")
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _read_template(arg: str) -> Template:
    """Шаблон из файла или из stdin ("-")."""
    if arg == STDIN_MARKER:
        return Template.compile(sys.stdin.read(), name="<stdin>")
    return Template.from_file(Path(arg))


def _read_data(arg: Optional[str]) -> HashBuilder:
    """
    Парсит аргумент --data.

    Поддерживает два формата:
    - Из файла: path/to/data.json или .yaml/.yml
    - Из stdin: - (JSON)
    """
    if not arg:
        return HashBuilder()
    if arg == STDIN_MARKER:
        return HashBuilder.from_json(sys.stdin.read())
    return HashBuilder.from_file(Path(arg))


def _load_cfg(ns: argparse.Namespace) -> StacheConfig:
    cfg_arg = getattr(ns, "config", None)
    cfg_path = Path(cfg_arg) if cfg_arg else find_config(Path.cwd())
    if cfg_arg and not cfg_path.is_file():
        raise ValueError(f"Config file not found: {cfg_path}")
    return load_config(cfg_path)


def _partials(ns: argparse.Namespace, cfg: StacheConfig, fallback_dir: Path) -> FileSystemPartialResolver:
    """Каталог partial: --partials > stache.yaml > fallback_dir."""
    if getattr(ns, "partials", None):
        root = Path(ns.partials)
    elif cfg.partials_dir is not None:
        root = cfg.partials_dir
    else:
        root = fallback_dir
    return FileSystemPartialResolver(root, suffix=cfg.partial_suffix, exclude=cfg.exclude)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.verbose))

    try:
        if ns.cmd == "render":
            if ns.template == STDIN_MARKER and ns.data == STDIN_MARKER:
                raise ValueError("Template and data cannot both be read from stdin")
            cfg = _load_cfg(ns)
            template = _read_template(ns.template)
            data = _read_data(ns.data)
            template_dir = Path.cwd() if ns.template == STDIN_MARKER else Path(ns.template).parent
            sys.stdout.write(template.render(data, _partials(ns, cfg, template_dir)))
            return 0

        if ns.cmd == "parse":
            template = _read_template(ns.template)
            result: Dict[str, Any] = {
                "nodes": ast_to_dict(template.nodes),
                "partials": sorted({node.key for node in collect_partial_nodes(template.nodes)}),
            }
            sys.stdout.write(jdumps(result, pretty=bool(ns.pretty)))
            return 0

        if ns.cmd == "list":
            cfg = _load_cfg(ns)
            listing: Dict[str, Any]
            if ns.what == "partials":
                listing = {"partials": _partials(ns, cfg, Path.cwd()).list_names()}
            else:
                raise ValueError(f"Unknown list target: {ns.what}")
            sys.stdout.write(jdumps(listing))
            return 0

    except StacheError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
