"""Ready-to-use codecs: raw bytes, delimited bytes and lines."""