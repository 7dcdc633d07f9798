"""
RDF vocabularies shared by the converters.

Standard vocabularies come from `rdflib.namespace`; the dataset specific ones
are declared here so that every adapter and both sinks agree on the same
namespace IRIs and serialization prefixes.
"""

from rdflib import Namespace
from rdflib.namespace import DCTERMS, RDF, RDFS, XSD

PROV = Namespace("http://www.w3.org/ns/prov#")
PAV = Namespace("http://swan.mindinformatics.org/ontologies/1.2/pav/")
NP = Namespace("http://www.nanopub.org/nschema#")
SIO = Namespace("http://semanticscience.org/resource/")
HDA = Namespace(
    "http://rdf.biosemantics.org/dataset/huntingtons_disease_associations#"
)

# Prefixes written into every serialized context graph. The default ("")
# prefix is bound to the base IRI by the file sink itself.
DEFAULT_PREFIXES = {
    "dcterms": DCTERMS,
    "np": NP,
    "rdf": RDF,
    "pav": PAV,
    "xsd": XSD,
    "rdfs": RDFS,
    "prov": PROV,
    "hda": HDA,
    "gda": SIO,
}

__all__ = [
    "DCTERMS",
    "DEFAULT_PREFIXES",
    "HDA",
    "NP",
    "PAV",
    "PROV",
    "RDF",
    "RDFS",
    "SIO",
    "XSD",
]
