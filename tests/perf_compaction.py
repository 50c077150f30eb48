from pyderiv import letrec, alt, cat, char, rep, parse
import time

digits = alt(*(char(d) for d in "0123456789"))
expression = letrec(lambda e: alt(cat(e, char('+'), e),
                                  cat(char('('), e, char(')')),
                                  rep(digits)))

def time_parse(n: int, compaction):
    text = "+".join(["(12)"] * n)
    time_start = time.time()
    _ = parse(text, expression, compaction=compaction)
    return time.time() - time_start

def run_timing():
    import matplotlib.pyplot as plt
    sizes = list(range(1, 6))
    times_compacted = []
    times_plain = []
    for x in sizes:
        times_compacted.append(time_parse(n=x, compaction=True))
        times_plain.append(time_parse(n=x, compaction=False))
    plt.plot([f"{x}" for x in sizes], times_compacted, "-o", label="Compacted")
    plt.plot([f"{x}" for x in sizes], times_plain, "-o", label="Uncompacted")
    plt.xlabel("# summands")
    plt.yscale('log')
    plt.ylabel("Total time (log s)")
    plt.legend()
    plt.show()

if __name__ == "__main__":
    run_timing()
