import argparse
import logging
import sys

from clothsim.exceptions import ClothSimulationError
from clothsim.interaction import cut
from clothsim.logging_config import setup_logging
from clothsim.params import ClothLayout, ObstacleConfig, Scene, SimulationParameters
from clothsim.world import ClothSimulation

logger = logging.getLogger("clothsim")


def build_parser():
    defaults = Scene()
    layout = defaults.layout
    params = defaults.parameters

    parser = argparse.ArgumentParser(description="Headless tearable cloth simulation")
    parser.add_argument("--rows", type=int, default=layout.rows, help="Cloth rows")
    parser.add_argument("--columns", type=int, default=layout.columns, help="Cloth columns")
    parser.add_argument("--spacing", type=float, default=layout.spacing, help="Rest distance between points")
    parser.add_argument("--origin", type=float, nargs=2, metavar=("X", "Y"),
                        default=(layout.origin_x, layout.origin_y), help="Top-left point of the cloth")
    parser.add_argument("--no-pin", action="store_true", help="Do not pin the top row")
    parser.add_argument("--width", type=float, default=defaults.width, help="Domain width")
    parser.add_argument("--height", type=float, default=defaults.height, help="Domain height")
    parser.add_argument("--frames", type=int, default=300, help="Number of frames to simulate")
    parser.add_argument("--dt", type=float, default=params.dt, help="Time step")
    parser.add_argument("--iterations", type=int, default=params.solver_iterations,
                        help="Solver iterations per frame")
    parser.add_argument("--snap-ratio", type=float, default=params.snap_ratio,
                        help="Stretch ratio at which a constraint breaks")
    parser.add_argument("--gravity", type=float, nargs=2, metavar=("GX", "GY"),
                        default=(params.gravity.x, params.gravity.y), help="Gravity vector")
    parser.add_argument("--obstacle", type=float, nargs=3, metavar=("X", "Y", "R"), default=None,
                        help="Add a circular obstacle")
    parser.add_argument("--cut", type=float, nargs=3, metavar=("X", "Y", "R"), default=None,
                        help="Cut the cloth around (X, Y) with radius R")
    parser.add_argument("--cut-frame", type=int, default=0, help="Frame before which --cut is applied")
    parser.add_argument("--report-every", type=int, default=60, help="Log statistics every N frames")
    parser.add_argument("--check", action="store_true", help="Verify bookkeeping invariants after every frame")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def scene_from_args(args):
    parameters = SimulationParameters(
        gravity=tuple(args.gravity),
        dt=args.dt,
        solver_iterations=args.iterations,
        snap_ratio=args.snap_ratio,
    )
    layout = ClothLayout(
        rows=args.rows,
        columns=args.columns,
        spacing=args.spacing,
        origin_x=args.origin[0],
        origin_y=args.origin[1],
        pin_top_row=not args.no_pin,
    )
    obstacle = ObstacleConfig(*args.obstacle) if args.obstacle else None
    return Scene(width=args.width, height=args.height, parameters=parameters,
                 layout=layout, obstacle=obstacle)


def run(args):
    simulation = ClothSimulation.from_scene(scene_from_args(args))
    report_every = max(1, args.report_every)

    for frame in range(args.frames):
        if args.cut is not None and frame == args.cut_frame:
            marked = cut(simulation, *args.cut)
            logger.info(f"Frame {frame}: cut marked {marked} constraints")
        simulation.step()
        if args.check:
            simulation.check_invariants()
        if (frame + 1) % report_every == 0:
            s = simulation.stats()
            logger.info(f"Frame {s['frame']}: {s['points']} points, {s['constraints']} constraints")

    s = simulation.stats()
    logger.info(f"Finished after {s['frame']} frames: {s['points']} points, {s['constraints']} constraints")
    return simulation


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, quiet=args.quiet, debug=args.debug)
    try:
        run(args)
    except ClothSimulationError as exc:
        logger.error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
