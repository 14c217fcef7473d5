from setuptools import setup

package_name = "arm_telemetry"

setup(
    name="arm-telemetry",
    version="0.1.0",
    packages=[package_name, package_name + ".link"],
    python_requires=">=3.9",
    install_requires=[
        "setuptools",
        "pyserial",
        "click",
        "pydantic>=2",
        "pydantic-settings>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=True,
    maintainer="TODO",
    maintainer_email="todo@example.com",
    description="Telemetry simulator and frame analyzer for a 6-axis robotic arm.",
    license="MIT",
    entry_points={
        "console_scripts": [
            "arm_simulator = arm_telemetry.simulator_main:main",
            "arm_analyzer = arm_telemetry.analyzer_main:main",
        ],
    },
)
