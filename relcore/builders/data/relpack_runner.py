"""
Starts a program packaged with relpack, using the interpreter and packages
bundled in the same folder.
"""

import json
import os
import runpy
import sys

ROOT = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(ROOT, 'relpack_runner.json')) as f:
    settings = json.load(f)

# Bundled interpreter first on PATH so child processes use it too
os.environ['PATH'] = os.path.join(ROOT, 'bin') + os.pathsep + os.environ.get('PATH', '')

packages = os.path.join(ROOT, settings['package_home'], 'packages')
sys.path.insert(0, packages)
os.environ['PYTHONPATH'] = packages

script = os.path.join(ROOT, settings['executable'])
source = os.path.join(ROOT, 'src')
sys.path.insert(0, source)
os.chdir(source)

sys.argv = [script] + sys.argv[1:]
runpy.run_path(script, run_name='__main__')
