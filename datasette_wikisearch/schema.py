current_schema_version = 1000000;

schema = """
PRAGMA user_version = {};
""".format(current_schema_version) + """

-- Crawled pages. Titles are unique; re-crawled titles are ignored, never updated.
CREATE TABLE IF NOT EXISTS pages(
  title text primary key,
  content text not null,
  -- Category names joined with '|'
  categories text,
  -- ISO-8601, UTC
  lastModify text
);
"""

# Key/value table backing the inverted index. Values are zstd-compressed.
index_schema = """
CREATE TABLE IF NOT EXISTS kv(
  key text primary key,
  value blob not null
);
"""
