import subprocess


def check_graphviz_installed():
    try:
        subprocess.run(["dot", "-V"], check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


def require_graphviz():
    if not check_graphviz_installed():
        raise EnvironmentError("Graphviz executable not found. Please install [Graphviz](https://www.graphviz.org/download/). On macOS, use `brew install graphviz`.")


def symbol_label(symbol) -> str:
    """Printable label for a symbol or witness leaf; the empty string shows as ϵ."""
    if symbol == '' or symbol == ():
        return '&#x03f5;'
    return str(symbol)
