"""
Warehouse packer — entry point.

Usage:
    python -m warehouse serve                # start web server on :8000
    python -m warehouse serve --port 3000
    python -m warehouse pack --seed 7        # pack once, print JSON summary
    python -m warehouse pack --width 200 --length 200 --boxes 6
"""

import json
import logging
import sys


_PACK_FLAGS = {
    "--width": "storage_width",
    "--length": "storage_length",
    "--boxes": "num_rectangles",
    "--min-side": "min_side",
    "--max-side": "max_side",
    "--clearance": "clearance",
    "--step": "step",
}


def _pack(args: list[str]) -> int:
    from warehouse.pipeline.config import PackerConfig, WarehouseConfig
    from warehouse.pipeline.placer import generate_and_pack, stats_to_dict

    overrides: dict[str, int] = {}
    seed = None
    budget = None
    try:
        for i, a in enumerate(args):
            if i + 1 >= len(args):
                break
            if a in _PACK_FLAGS:
                overrides[_PACK_FLAGS[a]] = int(args[i + 1])
            elif a == "--seed":
                seed = int(args[i + 1])
            elif a == "--time-budget":
                budget = float(args[i + 1])
        config = WarehouseConfig.from_dict(overrides)
    except ValueError as e:
        # ConfigError is a ValueError too
        print(f"Error: {e}")
        return 1

    result, stats = generate_and_pack(
        config, seed=seed, packer_config=PackerConfig(time_budget_s=budget))
    summary = {
        "config": config.to_dict(),
        "stats": stats_to_dict(stats),
        "unpacked": result.unpacked_ids,
        "unsafe_packing_paths": result.unsafe_path_ids,
        "stop_reason": result.stop_reason,
    }
    print(json.dumps(summary, indent=2))
    return 0


def main():
    args = sys.argv[1:]
    cmd = args[0] if args else "serve"
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if cmd == "serve":
        port = 8000
        host = "127.0.0.1"
        for i, a in enumerate(args):
            if a == "--port" and i + 1 < len(args):
                port = int(args[i + 1])
            elif a == "--host" and i + 1 < len(args):
                host = args[i + 1]

        from warehouse.web.server import main as serve
        serve(host=host, port=port)
    elif cmd == "pack":
        sys.exit(_pack(args[1:]))
    else:
        print(f"Unknown command: {cmd}")
        print("Usage: python -m warehouse serve [--port PORT] [--host HOST]")
        print("       python -m warehouse pack [--seed N] [--width W] [--length L] "
              "[--boxes N] [--min-side S] [--max-side S] [--clearance C] "
              "[--step S] [--time-budget SECONDS]")
        sys.exit(1)


if __name__ == "__main__":
    main()
