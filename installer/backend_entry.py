import os
import sys
import multiprocessing
import logging

# When running from the source, __file__ is installer/backend_entry.py, so the root is ..
# When frozen (PyInstaller), sys._MEIPASS is the unpacked bundle.
if getattr(sys, 'frozen', False):
    base_dir = sys._MEIPASS
else:
    base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

sys.path.insert(0, base_dir)

from src.api.main import app
import uvicorn

if __name__ == "__main__":
    multiprocessing.freeze_support()

    import argparse
    parser = argparse.ArgumentParser(description="Run the diary backend")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default="info")
    args, unknown = parser.parse_known_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)
