from img_meta.cli import PROG_NAME, app

if __name__ == "__main__":
    app(prog_name=PROG_NAME)
