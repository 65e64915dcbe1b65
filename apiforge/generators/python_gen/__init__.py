from apiforge.generators.python_gen.generator import generate_python_code

__all__ = ["generate_python_code"]
