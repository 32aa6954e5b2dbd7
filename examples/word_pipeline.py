"""
Lazy pipeline over a generator, with scoped cleanup and optional values.

Run: FSTREAM_LOG_LEVEL=DEBUG python examples/word_pipeline.py
"""
from fstream import FOption, FStream, Scope


def words():
    text = "the quick brown fox jumps over the lazy dog and the quick cat"
    for w in text.split():
        yield w


def main():
    with Scope() as scope:
        # Closed on scope exit while the generator still has words left
        src = scope.closing(FStream.from_stream(words()))
        print("first word =>", src.next().get())
        print("next long word =>", src.filter(lambda w: len(w) > 3).map(str.upper).next())  # FOption('QUICK')

    # take() drains its parent, so nothing would be left to close here
    print("long words =>", FStream.from_stream(words()).filter(lambda w: len(w) > 3).take(2).to_list())
    print("distinct =>", sorted(FStream.from_stream(words()).to_set()))
    print("by length =>", FStream.from_stream(words()).drop(8).sort(key=len).to_list())

    lookup = {"fox": 3, "dog": 4}
    found = FOption.of(lookup.get("cat")).map(lambda n: n * 2)
    print("cat =>", found.get_or_else(0))           # 0
    print("nested =>", FStream.of(FOption.of(FOption.of(2))).flat_map(lambda x: x + 1).to_list())  # [3]


if __name__ == "__main__":
    main()
