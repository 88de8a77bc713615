# framesketch/api - REST surface for the editor
