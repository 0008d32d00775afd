"""
Lifecycle task names and groups used to fan out the build into multiple
builds in a CI pipeline.
"""

CI_GROUP = "CI Lifecycle"
VERIFICATION_GROUP = "verification"
BUILD_GROUP = "build"

COMPILE_ALL_BUILD = "compileAllBuild"
SANITY_CHECK = "sanityCheck"
QUICK_TEST = "quickTest"
PLATFORM_TEST = "platformTest"
ALL_VERSIONS_CROSS_VERSION_TEST = "allVersionsCrossVersionTest"
ALL_VERSIONS_INTEG_MULTI_VERSION_TEST = "allVersionsIntegMultiVersionTest"
SOAK_TEST = "soakTest"
PACKAGE_BUILD = "packageBuild"

TEST_VERSIONS_PROPERTY = "testVersions"
