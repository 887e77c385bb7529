from componentkit.cli import validate

if __name__ == "__main__":
    validate(prog_name="componentkit-validate")
