"""karate_action

Run Karate API tests as a CI step.

Subpackages:

- :mod:`karate_action.artifacts` - download and promote ``karate.jar``
- :mod:`karate_action.execution` - run Karate and judge its output
- :mod:`karate_action.report` - render the results table
- :mod:`karate_action.io` - atomic filesystem helpers
"""

from __future__ import annotations

__version__ = "0.3.0"
