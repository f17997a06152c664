"""A checksummed packet protocol with JSON payloads, built on the framer."""