"""Line and plane fitting example for robustfit."""

from robustfit.core import FittingProcessor
from robustfit.utils.io_handler import save_points, save_parameters, JSONWriter
from robustfit.utils.synthetic import create_random_line_points, create_random_plane_points


def plane_fitting_example(processor: FittingProcessor, output_dir: str):
    """Fit a plane to a noisy 100x100 grid."""
    points = create_random_plane_points(size=100, perturb=2.0)
    save_points(points, f"{output_dir}/plane_random_points.txt")

    result = processor.process(points, model="plane")
    print(f"RANSAC took: {result['processing_metadata']['processing_time_ms']} ms.")

    save_points(processor.inlier_points(points, result), f"{output_dir}/plane_inlier_points.txt")
    if result["model"]["parameters"] is not None:
        save_parameters(result["model"]["parameters"], f"{output_dir}/plane.txt")
    return result


def line_fitting_example(processor: FittingProcessor, output_dir: str):
    """Fit a line to 500 points scattered around y = x."""
    points = create_random_line_points(n_points=500, side=1000, perturb=25.0)
    save_points(points, f"{output_dir}/line_random_points.txt")

    result = processor.process(points, model="line")
    print(f"RANSAC took: {result['processing_metadata']['processing_time_ms']} ms.")

    save_points(processor.inlier_points(points, result), f"{output_dir}/line_inlier_points.txt")
    if result["model"]["parameters"] is not None:
        save_parameters(result["model"]["parameters"], f"{output_dir}/line.txt")
    return result


def main():
    """Run both fitting examples."""
    output_dir = "output"

    # A low success probability keeps the line demo short
    processor = FittingProcessor({
        "line": {"success_probability": 0.3},
        "logging": {"level": "INFO", "log_file": f"{output_dir}/fitting.log"},
    })

    results = {
        "plane": plane_fitting_example(processor, output_dir),
        "line": line_fitting_example(processor, output_dir),
    }
    for kind, result in results.items():
        print(f"{kind}: {result['status']}, {result['model']['inlier_count']} inliers")

    JSONWriter.save_results(results, f"{output_dir}/results.json")
    print(f"Results saved to {output_dir}")


if __name__ == "__main__":
    main()
