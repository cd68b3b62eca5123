"""create-glsl-sandbox: scaffold a Vite + GLSL shader sandbox.

Writes a ready-to-run project (three.js or raw WebGL, JavaScript or
TypeScript) and optionally installs dependencies, initialises git with the
LYGIA shader library as a submodule, opens an editor and starts the dev
server.
"""

__version__ = "0.1.0"
