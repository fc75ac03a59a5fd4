"""Built-in CLI sub-commands for gh-profile.

* :mod:`~ghprofile.commands.generate` -- fetch, render and write a README.
* :mod:`~ghprofile.commands.preview` -- render to stdout with personal
  details redacted.
* :mod:`~ghprofile.commands.templates` -- list available templates.
* :mod:`~ghprofile.commands.plugins` -- list discovered plugins and their
  resolved state.
* :mod:`~ghprofile.commands.config` -- show or create the config file.

Single commands export a plain callback registered on the root app;
``config`` exports a :class:`typer.Typer` sub-application.
"""
