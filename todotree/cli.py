#!/usr/bin/env python3
"""
TODOTREE - CLI Interface
========================
Command-line tool for managing saved task trees.

Usage:
    todotree create groceries
    todotree add "buy milk"
    todotree add "dairy" --view
    todotree add "cheese" --parent 2
    todotree show
    todotree complete 1
    todotree remove 2
    todotree list
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .errors import DocumentNotFoundError, TodoTreeError
from .manager import DEFAULT_TREES_DIR, TreeManager
from .outline import export_outline
from .report import render_tree
from .store import ROOT_ID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todotree",
        description="Hierarchical task tree manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  todotree create groceries             Create a new task tree
  todotree add "buy milk"               Add an item under the root
  todotree add dairy --view             Add a view under the root
  todotree add cheese --parent 2        Add an item under node 2
  todotree show                         Show the most recent tree
  todotree complete 1                   Mark item 1 as done
  todotree remove 2                     Remove node 2 and its subtree
  todotree children 0 --deep            List every node id
  todotree list                         List all task trees
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--dir", default=DEFAULT_TREES_DIR, help="Trees directory")

    # Options for commands acting on one tree
    one_tree = argparse.ArgumentParser(add_help=False, parents=[common])
    one_tree.add_argument("--list", dest="tree_id", help="Task tree ID (default: most recent)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    create_parser = subparsers.add_parser("create", parents=[common], help="Create a task tree")
    create_parser.add_argument("name", help="Tree name")
    create_parser.add_argument("-d", "--description", help="Tree description")

    list_parser = subparsers.add_parser("list", parents=[common], help="List all task trees")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    show_parser = subparsers.add_parser("show", parents=[one_tree], help="Show a task tree")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON outline")

    add_parser = subparsers.add_parser("add", parents=[one_tree], help="Add an item or view")
    add_parser.add_argument("label", help="Item label (or view name with --view)")
    add_parser.add_argument("-p", "--parent", type=int, help="Parent node ID (default: root)")
    add_parser.add_argument("--view", action="store_true", help="Add a view instead of an item")

    complete_parser = subparsers.add_parser("complete", parents=[one_tree], help="Mark an item done")
    complete_parser.add_argument("node_id", type=int, help="Item ID")
    complete_parser.add_argument("--undo", action="store_true", help="Mark the item open again")

    remove_parser = subparsers.add_parser("remove", parents=[one_tree], help="Remove a node and its subtree")
    remove_parser.add_argument("node_id", type=int, help="Node ID")

    children_parser = subparsers.add_parser("children", parents=[one_tree], help="List child IDs")
    children_parser.add_argument("node_id", type=int, nargs="?", default=ROOT_ID, help="Node ID (default: root)")
    children_parser.add_argument("--deep", action="store_true", help="Include all descendants")

    return parser


def _open_tree(manager: TreeManager, tree_id: Optional[str]) -> None:
    """Load the requested tree, or the most recent one"""
    tree_id = tree_id or manager.latest_id()
    if not tree_id:
        raise DocumentNotFoundError("(none saved yet)")
    if manager.load(tree_id) is None:
        raise DocumentNotFoundError(tree_id)


def run(args: argparse.Namespace) -> int:
    manager = TreeManager(trees_dir=args.dir)

    if args.command == "create":
        document = manager.create(args.name, description=args.description)
        print(f"✅ Created: {document.id}")
        print(f"   Name: {document.name}")
        print(f"   File: {args.dir}/{document.id}.json")
        return 0

    if args.command == "list":
        trees = manager.list_trees()
        if args.json:
            print(json.dumps(trees, indent=2))
            return 0
        if not trees:
            print("No task trees found")
            return 0
        print("📋 Task Trees:")
        print("-" * 60)
        for tree in trees:
            print(f"  [{tree['id']}] {tree['name']}")
            print(f"      Progress: {tree['progress']} | Open: {tree['summary']['open']}")
            print(f"      Updated: {tree['updated_at']}")
        print("-" * 60)
        return 0

    _open_tree(manager, args.tree_id)
    store = manager.store

    if args.command == "show":
        if args.json:
            payload = {
                "id": manager.document.id,
                "name": manager.document.name,
                "outline": [entry.model_dump(mode="json") for entry in export_outline(store)],
            }
            print(json.dumps(payload, indent=2, ensure_ascii=False))
        else:
            print(render_tree(store, title=manager.document.name))

    elif args.command == "add":
        if args.view:
            node_id = manager.add_view(args.label, args.parent)
        else:
            node_id = manager.add_item(args.label, args.parent)
        print(f"➕ Added [{node_id}] {args.label}")

    elif args.command == "complete":
        item = manager.complete(args.node_id, completed=not args.undo)
        state = "Reopened" if args.undo else "Completed"
        print(f"✅ {state}: [{args.node_id}] {item.label}")

    elif args.command == "remove":
        if args.node_id == ROOT_ID:
            print("⛔ The root cannot be removed")
            return 1
        renumbered = manager.remove(args.node_id)
        if renumbered is None:
            print(f"❌ Node not found: {args.node_id}")
            return 1
        print(f"🗑️ Removed [{args.node_id}]")
        for old_id, new_id in sorted(renumbered.items()):
            print(f"   [{old_id}] is now [{new_id}]")

    elif args.command == "children":
        if args.node_id not in store:
            print(f"❌ Node not found: {args.node_id}")
            return 1
        ids = store.deep_children(args.node_id) if args.deep else store.children(args.node_id)
        print(" ".join(str(node_id) for node_id in ids))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except TodoTreeError as e:
        print(f"❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
