"""
main.py — Bootstrap

1. Create the app
2. Push the game scene (it loads tuning and the level)
3. Run

    python main.py [path/to/map.toml]
"""

import sys
from core.app import App
from scenes.game_scene import GameScene


def main():
    level_path = sys.argv[1] if len(sys.argv) > 1 else None
    app = App(title="Night Shift", width=512, height=512)
    app.push_scene(GameScene(level_path))
    app.run()


if __name__ == "__main__":
    main()
