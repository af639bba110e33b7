import argparse
import time

from pencildraw.api import PencilDrawing, RunConfig
from pencildraw.project import Project
from pencildraw.utils.io_utils import write_image


def main():
    """
    Main entry point for running the pencil drawing pipeline.
    Either loads a YAML project (--config) or renders a single image
    given on the command line (--input/--output).
    """
    parser = argparse.ArgumentParser(
        description="Render a photograph as a pencil drawing.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the project configuration YAML file.",
    )
    parser.add_argument("--input", type=str, help="Input image path.")
    parser.add_argument("--output", type=str, help="Output image path.")
    parser.add_argument(
        "--anchors",
        type=str,
        default=None,
        help="Optional text file with one 'x y' anchor point per line.",
    )
    parser.add_argument("--levels", type=int, default=1, help="Pyramid levels.")
    parser.add_argument("--seed", type=int, default=0, help="Random seed.")
    parser.add_argument(
        "--device",
        choices=["cpu", "cuda"],
        default="cpu",
        help="Torch device for the convolution.",
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Print per-stage timing",
    )
    args = parser.parse_args()

    if args.config is None and (args.input is None or args.output is None):
        parser.error("either --config or both --input and --output are required")

    print("========================================")
    print("        Starting Pencil Drawing         ")
    print("========================================")

    start_time = time.time()

    try:
        if args.config is not None:
            print(f"\nLoading project with configuration: {args.config}")
            project = Project(config_path=args.config)
            project.run()
        else:
            config = RunConfig(
                levels=args.levels,
                seed=args.seed,
                device=args.device,
                benchmark=args.benchmark,
            )
            drawing = PencilDrawing(config).run(args.input, args.anchors)
            write_image(args.output, drawing)
            print(f"\nOutput saved to: {args.output}")

    except FileNotFoundError as e:
        print(f"\n[ERROR] A required file was not found: {e}")
        print("Please check the paths in your arguments or configuration file.")
    except Exception as e:
        print(f"\n[ERROR] An unexpected error occurred: {e}")
        import traceback

        traceback.print_exc()

    finally:
        end_time = time.time()
        print("\n----------------------------------------")
        print(f"Pipeline finished in {end_time - start_time:.2f} seconds.")
        print("========================================")


if __name__ == "__main__":
    main()
