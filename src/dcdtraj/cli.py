import argparse
import logging
from pathlib import Path
from typing import List, Optional

import yaml

from dcdtraj.io.loader import open_dcd
from dcdtraj.io.repair import repair
from dcdtraj.io.writer import TrajectoryWriter
from dcdtraj.utils.config_manager import ConfigManager
from dcdtraj.utils.helpers import parse_atom_indices
from dcdtraj.visualization.plotter import AtomSeriesPlotter

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='dcdtraj', description='Inspect, repair and export DCD trajectories.')
    parser.add_argument('--config', type=str, help='Path to YAML configuration file.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    sub = parser.add_subparsers(dest='command', required=True)

    p_info = sub.add_parser('info', help='Print the decoded header as YAML.')
    p_info.add_argument('trajectory', nargs='?', help='Path to DCD file.')

    p_repair = sub.add_parser('repair', help='Rewrite the frame count from the file size.')
    p_repair.add_argument('trajectory', nargs='?', help='Path to DCD file.')

    p_export = sub.add_parser('export', help='Export coordinates to .npy/.npz.')
    p_export.add_argument('trajectory', nargs='?', help='Path to DCD file.')
    p_export.add_argument('--output-dir', type=str, help='Directory for exported files.')
    p_export.add_argument('--format', choices=['npy', 'npz'], help='Output format for the full coordinate array.')
    p_export.add_argument('--atoms', type=str, help="Export only these free atoms, e.g. '0,4,10-12'.")

    p_plot = sub.add_parser('plot', help="Plot one atom's x/y/z time series.")
    p_plot.add_argument('trajectory', nargs='?', help='Path to DCD file.')
    p_plot.add_argument('--atom', type=int, help='Free-atom index to plot.')
    p_plot.add_argument('--output', type=str, help='Output image path.')
    return parser


def _resolve_trajectory(args, cfg: ConfigManager) -> Path:
    path = args.trajectory or cfg.get_trajectory_config().get('file')
    if not path:
        raise ValueError("No trajectory file given (argument or trajectory.file in config).")
    return Path(path)


def _cmd_info(path: Path, cfg: ConfigManager) -> None:
    with open_dcd(path) as traj:
        info = traj.header.to_dict()
        info['frames_on_disk'] = traj.frames_on_disk
    print(yaml.safe_dump(info, default_flow_style=False, sort_keys=False), end='')


def _cmd_repair(path: Path, cfg: ConfigManager) -> None:
    n_frames = repair(path)
    print(f"{path}: {n_frames} frames")


def _cmd_export(path: Path, cfg: ConfigManager) -> None:
    export_cfg = cfg.get_export_config()
    writer = TrajectoryWriter(export_cfg['directory'])
    with open_dcd(path) as traj:
        writer.save_header(traj.header, f"{path.stem}.header.yaml")
        atoms = parse_atom_indices(export_cfg['atoms'], traj.free_atoms)
        if atoms is None:
            writer.save_positions(traj, fmt=export_cfg['format'])
        else:
            for atom in atoms:
                writer.save_atom(traj, atom)


def _cmd_plot(path: Path, cfg: ConfigManager) -> None:
    plot_cfg = cfg.get_plot_config()
    if plot_cfg['atom'] is None:
        raise ValueError("No atom selected for plotting (--atom or plot.atom in config).")
    output = plot_cfg['output'] or f"{path.stem}.atom{plot_cfg['atom']}.png"
    with open_dcd(path) as traj:
        AtomSeriesPlotter(traj.atom(plot_cfg['atom']), output,
                          color_scheme=plot_cfg['color_scheme']).generate_plot()


COMMANDS = {
    'info': _cmd_info,
    'repair': _cmd_repair,
    'export': _cmd_export,
    'plot': _cmd_plot,
}


def main(argv: Optional[List[str]] = None):
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        cfg = ConfigManager(args.config)
        overrides = {}
        if args.command == 'export':
            overrides['export'] = {k: v for k, v in
                                   {'directory': args.output_dir, 'format': args.format, 'atoms': args.atoms}.items()
                                   if v is not None}
        elif args.command == 'plot':
            overrides['plot'] = {k: v for k, v in {'atom': args.atom, 'output': args.output}.items()
                                 if v is not None}
        if overrides:
            cfg.update_config(overrides)

        path = _resolve_trajectory(args, cfg)
        logger.debug(f"Running '{args.command}' on {path}")
        COMMANDS[args.command](path, cfg)

    except FileNotFoundError as e: logger.error(f"File Error: {e}"); raise SystemExit(1)
    except ValueError as e: logger.error(f"Value Error: {e}"); raise SystemExit(1)
    except Exception as e: logger.error(f"Unexpected error: {e}", exc_info=True); raise SystemExit(1)

if __name__ == "__main__":
    main()
