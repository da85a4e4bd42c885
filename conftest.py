# Make the top-level modules (app, cli) and packages (api, core, ...) importable
# when running pytest from a source checkout.
import os
import sys

ROOT = os.path.dirname(__file__)
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
