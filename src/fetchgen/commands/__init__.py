"""Built-in CLI commands for fetchgen.

* :mod:`~fetchgen.commands.generate` -- render the TypeScript client.
* :mod:`~fetchgen.commands.inspect` -- print the resolved model.
* :mod:`~fetchgen.commands.init` -- pin settings in ``fetchgen.json``.

Each module exports a plain callback registered on the root app in
:mod:`fetchgen.app`.
"""
