from pathlib import Path

class LocalTranscriptWriter:
    def write_text(self, directory: Path, filename: str, text: str) -> Path:
        """
        Writes {directory}/{filename} as UTF-8.
        An existing file with the same name gets a numeric suffix instead of being overwritten.
        """
        directory.mkdir(parents=True, exist_ok=True)

        destination = directory / filename
        counter = 1
        while destination.exists():
            destination = directory / f"{Path(filename).stem}_{counter}{Path(filename).suffix}"
            counter += 1

        destination.write_text(text, encoding="utf-8")
        return destination
