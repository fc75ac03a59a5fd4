"""Data shaping and the generation pipeline.

* :mod:`~ghprofile.core.normalize` -- GitHub payloads to
  :class:`~ghprofile.models.NormalizedData`.
* :mod:`~ghprofile.core.aggregate` -- totals, language breakdown, top and
  recent repositories.
* :mod:`~ghprofile.core.sanitize` -- tool names to skillicons ids.
* :mod:`~ghprofile.core.generate` -- normalize, run plugins, render.
* :mod:`~ghprofile.core.assets` -- download remote images next to the README.
"""
