from apiforge.generators.php_gen.generator import generate_php_code

__all__ = ["generate_php_code"]
