"""homerange-crw visualization.

Modules:
  - style: Dark theme colours and helpers
  - paths: Trajectory and displacement plots
"""

from homerange_crw.viz.style import (  # noqa: F401
    DARK_BG,
    DARK_PANEL,
    TEXT_COLOR,
    apply_dark_theme,
    dark_figure,
    save_figure,
)

from homerange_crw.viz.paths import (  # noqa: F401
    path_plot_name,
    plot_displacement,
    plot_path,
)
