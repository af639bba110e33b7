from setuptools import find_packages, setup

setup(
    name="pencildraw",
    version="0.1.0",
    description="Pencil drawing stylization by flow-guided line integral convolution",
    packages=find_packages(include=["pencildraw", "pencildraw.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "opencv-python",
        "torch",
        "tqdm",
        "pydantic",
        "PyYAML",
        "imageio",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
