import os
import sys
import json
import pickle
import shutil
import argparse
import traceback
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor

import networkx as nx
import pathspec
from tqdm import tqdm

from dstraverse.adapters.usage_adapter import adapt_usage_records
from dstraverse.catalog import load_catalog
from dstraverse.extractors.node_kinds import get_profile
from dstraverse.registry.extractor_registry import get_extractor
from dstraverse.utils.networkx_graph import build_graph_from_schema, component_usage_counts, load_records_from_dir

USAGE = "Usage: dstraverse <file> [--language NAME] [--catalog PATH] [--profiles PATH]"


def _process_single_file_worker(args):
    code_path, language, catalog, profiles_path, root_dir_path, output_base_path = args
    try:
        extractor = get_extractor(language, catalog=catalog, profiles_path=profiles_path)
        extractor.process_file(str(code_path))
        rel_path = os.path.relpath(code_path, root_dir_path)
        json_rel = os.path.splitext(rel_path)[0] + ".json"
        out_path = os.path.join(output_base_path, json_rel)
        os.makedirs(os.path.dirname(out_path), exist_ok=True)
        extractor.write_to_file(out_path)
        return True
    except Exception:
        print(traceback.format_exc())
        print(f"Unable to process - {code_path}. Skipping it.")
        return False


def collect_source_files(root_dir, extensions):
    root_dir = Path(root_dir)
    gitignore_pth = root_dir / ".gitignore"
    gitign_pattern = gitignore_pth.read_text().splitlines() if gitignore_pth.exists() else []
    spec = pathspec.PathSpec.from_lines("gitwildmatch", gitign_pattern)

    files = []
    for file_path in sorted(root_dir.rglob("*")):
        if not file_path.is_file() or file_path.suffix not in extensions:
            continue
        if not spec.match_file(str(file_path.relative_to(root_dir))):
            files.append(file_path)
    return files


def create_usage_data(root_dir, output_base: str = "./output/usage", graph_dir: str = "./output/graph",
                      clear_existing: bool = True, language: str = "swift", catalog_path: str = None,
                      profiles_path: str = None):
    profile = get_profile(language, profiles_path)
    catalog = load_catalog(catalog_path)
    source_files = collect_source_files(root_dir, set(profile.extensions))

    if os.path.isdir(output_base) and clear_existing:
        shutil.rmtree(output_base, ignore_errors=True)
        shutil.rmtree(graph_dir, ignore_errors=True)

    os.makedirs(output_base, exist_ok=True)
    os.makedirs(graph_dir, exist_ok=True)

    tasks_args = [
        (code_path, language, catalog, profiles_path, root_dir, output_base)
        for code_path in source_files
    ]
    with ThreadPoolExecutor(max_workers=min(32, (os.cpu_count() or 1) + 4)) as executor:
        results = list(tqdm(executor.map(_process_single_file_worker, tasks_args),
                            total=len(tasks_args), desc="Extracting design system usage"))

    failed = results.count(False)
    print(f"Done! Processed {len(results) - failed} files ({failed} failed). All outputs in: {output_base}")

    schema = adapt_usage_records(load_records_from_dir(output_base))
    G = build_graph_from_schema(schema)

    graph_ml = os.path.join(graph_dir, "usage_graph.graphml")
    graph_gp = os.path.join(graph_dir, "usage_graph.gpickle")

    nx.write_graphml(G, graph_ml)
    with open(graph_gp, "wb") as f:
        pickle.dump(G, f)

    print(f"Wrote {graph_ml} and {graph_gp}")
    return component_usage_counts(G)


def main(argv=None):
    parser = argparse.ArgumentParser(prog="dstraverse", add_help=False,
                                     description="Extract design system component usage from a source file")
    parser.add_argument("files", nargs="*")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("--language", default="swift", help="Grammar profile to use (default: swift)")
    parser.add_argument("--catalog", default=None, help="Component catalog file (.toml or .json)")
    parser.add_argument("--profiles", default=None, help="Extra grammar profiles file (.toml)")

    args, unknown = parser.parse_known_args(argv)

    if args.help or unknown or len(args.files) != 1:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    try:
        catalog = load_catalog(args.catalog)
        extractor = get_extractor(args.language, catalog=catalog, profiles_path=args.profiles)
        records = extractor.process_file(args.files[0])
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(records, indent=4, ensure_ascii=False))


def batch_main(argv=None):
    parser = argparse.ArgumentParser(description="Create design system usage data for a source tree")
    parser.add_argument("root_dir", help="Root directory to scan for source files")
    parser.add_argument("--output_base", default="./output/usage",
                        help="Output base directory (default: ./output/usage)")
    parser.add_argument("--graph_dir", default="./output/graph",
                        help="Graph output directory (default: ./output/graph)")
    parser.add_argument("--no_clear", action="store_true",
                        help="Do not clear existing output directories")
    parser.add_argument("--language", default="swift", help="Grammar profile to use (default: swift)")
    parser.add_argument("--catalog", default=None, help="Component catalog file (.toml or .json)")
    parser.add_argument("--profiles", default=None, help="Extra grammar profiles file (.toml)")

    args = parser.parse_args(argv)

    try:
        print(f"Creating usage data from: {args.root_dir}")
        print(f"Output base: {args.output_base}")
        print(f"Graph directory: {args.graph_dir}")

        counts = create_usage_data(
            root_dir=args.root_dir,
            output_base=args.output_base,
            graph_dir=args.graph_dir,
            clear_existing=not args.no_clear,
            language=args.language,
            catalog_path=args.catalog,
            profiles_path=args.profiles,
        )
        for component, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
            print(f"  {component}: {count}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
