"""OptiFactory command-line interface."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys


def _default_data_dir() -> str:
    return os.path.join(os.path.expanduser("~"), ".optifactory")


def _build_parser():
    from optifactory.problems import PROBLEMS

    parser = argparse.ArgumentParser(
        prog="optifactory",
        description="Construct and run optimization algorithms by their short name",
    )
    parser.add_argument("--version", action="version", version="OptiFactory v0.1.0")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--data-dir", default=None, help="Directory for logs")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    sub = parser.add_subparsers(dest="command")

    lst = sub.add_parser("list", help="List the registered solvers")
    lst.add_argument("--library", action="append", dest="libraries",
                     help="Only load this library (repeatable)")

    sub.add_parser("libraries", help="List the declared solver libraries")

    solve = sub.add_parser("solve", help="Run a solver on a sample problem")
    solve.add_argument("--solver", default=None, help="Solver tag, e.g. lm_dense")
    solve.add_argument("--problem", default="rosenbrock", choices=sorted(PROBLEMS))
    solve.add_argument("--max-iterations", type=int, default=None)
    solve.add_argument("--json", action="store_true", help="Print the result as JSON")

    return parser


def _make_engine(args):
    from optifactory.core.engine import Engine

    engine = Engine(config_path=args.config, data_dir=args.data_dir or _default_data_dir())
    engine.initialize()
    return engine


def _do_list(args):
    from optifactory.core.libraries import declared_libraries

    engine = _make_engine(args)
    try:
        if args.libraries:
            engine.plugin_manager.deactivate_all()
            for name in args.libraries:
                try:
                    engine.plugin_manager.use_library(name)
                except KeyError:
                    print("Unknown library: %s" % name, file=sys.stderr)
                    print("Declared libraries: %s" % ", ".join(declared_libraries()),
                          file=sys.stderr)
                    return 1
        engine.solver_factory.list_solvers(sys.stdout)
    finally:
        engine.shutdown()
    return 0


def _do_libraries(args):
    from optifactory.core.libraries import declared_libraries, load_library_plugin

    engine = _make_engine(args)
    try:
        for name, module_path in declared_libraries().items():
            plugin = engine.plugin_manager.get_plugin(name)
            if plugin is None:
                try:
                    plugin = load_library_plugin(name)
                except ImportError as exc:
                    print("  %-12s unavailable (%s)" % (name, exc))
                    continue
            state = "active" if engine.plugin_manager.is_active(name) else "inactive"
            print("  %-12s %-9s %s" % (name, state, ", ".join(plugin.provides())))
    finally:
        engine.shutdown()
    return 0


def _do_solve(args):
    from optifactory.problems import get_problem

    engine = _make_engine(args)
    try:
        tag = args.solver or engine.config.get("solvers.default")
        problem = get_problem(args.problem)
        try:
            result = engine.solve(tag, problem, max_iterations=args.max_iterations)
        except KeyError:
            print("Unknown solver: %s" % tag, file=sys.stderr)
            print("Available solvers:", file=sys.stderr)
            engine.solver_factory.list_solvers(sys.stderr)
            return 1

        if args.json:
            payload = result.to_dict()
            payload["solver"] = tag
            payload["problem"] = problem.name
            print(json.dumps(payload, indent=2))
            return 0

        print("=" * 60)
        print("  Solver:      %s (%s)" % (tag, result.solver_name))
        print("  Problem:     %s" % problem.name)
        print("  Converged:   %s (%s)" % ("yes" if result.converged else "no", result.message))
        print("  Iterations:  %d" % result.iterations)
        print("  Final cost:  %.6e" % result.cost)
        print("  Solution:    [%s]" % ", ".join("%.8g" % v for v in result.x))
        print("  Time:        %.3f ms" % (result.solve_time_s * 1e3))
        print("=" * 60)
    finally:
        engine.shutdown()
    return 0


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "list":
        return _do_list(args)
    elif args.command == "libraries":
        return _do_libraries(args)
    elif args.command == "solve":
        return _do_solve(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
