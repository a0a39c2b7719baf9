"""homerange-crw: Home-range biased correlated random walk simulator.

Simulates individual movement paths under the fitted FOCUS turn-angle model
(wrapped Cauchy, homeward mean, concentration decaying with distance) and
the Scale-Changing step-length model (Weibull, scale linear in distance),
then reduces each path to the deciles of its distance from the home-range
center.

Modules:
  - types: ParameterSet, Path, DecileSummary and the error types
  - sampling: wrapped Cauchy and Weibull deviates
  - models: FOCUS and Scale-Changing models
  - movement: the random-walk recurrence
  - summary: displacement deciles
  - batch: per-dataset batch runner (serial or multiprocessing)
"""

__version__ = "0.1.0"
