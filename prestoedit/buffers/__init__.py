"""Buffer kinds that make up the editor's pane tree: text, hex, split, tabs, listings and views."""