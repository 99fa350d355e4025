"""Chart geometry builders and their serialization.

Builders in this package are pure functions of their inputs: they return an
abstract ChartGeometry tree and hold no state between calls. They must not
import Django so they stay testable without a rendering environment.
"""
