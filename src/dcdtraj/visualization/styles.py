"""
Plot styling module for dcdtraj.

This module provides predefined styles and color schemes for trajectory plots.
"""
import matplotlib.pyplot as plt
from typing import Dict, Any, Optional

# Default style parameters
DEFAULT_STYLE = {
    'figure.figsize': (10, 6),
    'figure.dpi': 100,
    'font.size': 12,
    'axes.labelsize': 14,
    'axes.titlesize': 16,
    'legend.fontsize': 12,
    'lines.linewidth': 1.5,
    'axes.grid': True,
    'grid.alpha': 0.3,
    'grid.linestyle': '--',
    'axes.spines.top': False,
    'axes.spines.right': False
}

# Color schemes; x/y/z series use primary/secondary/tertiary
COLOR_SCHEMES = {
    'default': {
        'primary': '#1f77b4',  # Blue
        'secondary': '#ff7f0e',  # Orange
        'tertiary': '#2ca02c',  # Green
        'background': '#ffffff',
        'grid': '#cccccc'
    },
    'dark': {
        'primary': '#4c72b0',
        'secondary': '#dd8452',
        'tertiary': '#55a868',
        'background': '#2d2d2d',
        'grid': '#404040'
    },
    'scientific': {
        'primary': '#000000',
        'secondary': '#e41a1c',
        'tertiary': '#377eb8',
        'background': '#ffffff',
        'grid': '#dddddd'
    }
}

def style_params(style: Optional[Dict[str, Any]] = None, color_scheme: str = 'default') -> Dict[str, Any]:
    """
    Build rcParams for a color scheme on top of DEFAULT_STYLE.

    Args:
        style: Dictionary of style parameters to override defaults
        color_scheme: Name of the color scheme to use ('default', 'dark', or 'scientific')
    """
    if color_scheme not in COLOR_SCHEMES:
        raise ValueError(f"Unknown color scheme: {color_scheme}. Must be one of: {list(COLOR_SCHEMES.keys())}")
    colors = COLOR_SCHEMES[color_scheme]

    params = dict(DEFAULT_STYLE)
    params.update({
        'axes.facecolor': colors['background'],
        'figure.facecolor': colors['background'],
        'grid.color': colors['grid'],
        'axes.prop_cycle': plt.cycler(color=[colors['primary'], colors['secondary'], colors['tertiary']]),
    })
    if style:
        params.update(style)
    return params
