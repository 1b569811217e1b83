#!/usr/bin/env python3
"""Print a window's coverage whenever it changes.

    python examples/watch_window.py "Terminal"
"""
from dotenv import load_dotenv
load_dotenv()

import asyncio
import sys

from occlusion import OcclusionCalculator, OcclusionConfig
from occlusion.providers import default_provider


async def main(owner: str) -> None:
    config = OcclusionConfig.from_env()
    calc = OcclusionCalculator(default_provider(skip_owners={"Dock", "WindowServer"}))

    window = calc.query().owner(owner).normal_layer().require()
    print(f"Watching {window.target}")

    observer = calc.observe(window.target, config=config)
    try:
        async for result in observer:
            print(f"{result.coverage:6.1%} covered, {len(result.visible_regions)} visible piece(s)")
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await observer.stop()
        print("Observer stopped — bye!")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "Terminal"))
